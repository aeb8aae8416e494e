"""Embedding models and the table-bound embedding function."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .models import DatabaseFields

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "BAAI/bge-base-en-v1.5"


class Embedder:
    """Abstract base class for embedding models."""

    def embed(self, texts: List[str]) -> List[List[float]]:
        """Embed multiple texts into vectors."""
        raise NotImplementedError

    def embed_one(self, text: str) -> List[float]:
        """Embed a single text into a vector."""
        return self.embed([text])[0]

    @property
    def dimension(self) -> int:
        """Length of the vectors produced by this model."""
        raise NotImplementedError


class SentenceTransformersEmbedder(Embedder):
    """Embedder using SentenceTransformers library."""

    def __init__(self, model_name: str) -> None:
        from sentence_transformers import SentenceTransformer  # type: ignore
        self.model_name = model_name
        self.model = SentenceTransformer(model_name)

    def embed(self, texts: List[str]) -> List[List[float]]:
        """Embed texts using SentenceTransformers model."""
        arr = self.model.encode(texts, normalize_embeddings=True, show_progress_bar=False)
        return [row.tolist() for row in arr]

    @property
    def dimension(self) -> int:
        return int(self.model.get_sentence_embedding_dimension())


class EmbeddingFunction:
    """An embedder bound to the record field it embeds.

    The table computes vectors for the ``source_field`` of every record it
    writes and for query text on search.
    """

    def __init__(self, embedder: Embedder, model_id: str, source_field: str = DatabaseFields.CONTENT) -> None:
        self.embedder = embedder
        self.model_id = model_id
        self.source_field = source_field

    def ndims(self) -> int:
        return self.embedder.dimension

    def compute_source_embeddings(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        vectors = self.embedder.embed(texts)
        if len(vectors) != len(texts):
            raise ValueError(
                f"Embedder returned {len(vectors)} vectors for {len(texts)} texts"
            )
        return vectors

    def compute_query_embedding(self, text: str) -> List[float]:
        return self.embedder.embed_one(text)


def create_embedding_function(
    model_id: str = DEFAULT_EMBEDDING_MODEL,
    target_field: str = DatabaseFields.CONTENT,
    embedder: Optional[Embedder] = None,
) -> EmbeddingFunction:
    """Create an embedding function for ``model_id`` bound to ``target_field``.

    A pre-built ``embedder`` may be passed to skip loading the model.
    """
    if embedder is None:
        logger.info(f"Loading embedding model {model_id}")
        embedder = SentenceTransformersEmbedder(model_id)
    return EmbeddingFunction(embedder, model_id=model_id, source_field=target_field)


def make_embedder(cfg: Dict) -> Embedder:
    """Create embedder from config.

    Args:
        cfg: Configuration dictionary

    Returns:
        Embedder instance

    Raises:
        SystemExit: If backend is invalid or dependencies are missing
    """
    backend = str(cfg.get("embedding", {}).get("backend", "sentence_transformers")).strip().lower()
    if backend != "sentence_transformers":
        raise SystemExit(f"Invalid embedding.backend: {backend!r}")

    model_name = cfg.get("embedding", {}).get("sentence_transformers_model", DEFAULT_EMBEDDING_MODEL)
    try:
        return SentenceTransformersEmbedder(model_name)
    except Exception as e:
        raise SystemExit(
            "Could not load sentence-transformers. "
            "Run: pip install -U sentence-transformers"
        ) from e


def make_embedding_function(cfg: Dict) -> EmbeddingFunction:
    """Create the table embedding function described by ``cfg``."""
    model_name = cfg.get("embedding", {}).get("sentence_transformers_model", DEFAULT_EMBEDDING_MODEL)
    return create_embedding_function(model_name, DatabaseFields.CONTENT, embedder=make_embedder(cfg))
