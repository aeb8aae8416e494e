"""Core functionality for notesync."""

from .models import DatabaseFields, NoteRecord, RowParseResult, now_timestamp, parse_row
from .embeddings import (
    DEFAULT_EMBEDDING_MODEL,
    Embedder,
    EmbeddingFunction,
    SentenceTransformersEmbedder,
    create_embedding_function,
    make_embedder,
    make_embedding_function,
)

__all__ = [
    "DatabaseFields",
    "NoteRecord",
    "RowParseResult",
    "now_timestamp",
    "parse_row",
    "DEFAULT_EMBEDDING_MODEL",
    "Embedder",
    "EmbeddingFunction",
    "SentenceTransformersEmbedder",
    "create_embedding_function",
    "make_embedder",
    "make_embedding_function",
]
