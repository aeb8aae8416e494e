"""Qdrant-backed notes table."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from qdrant_client import QdrantClient
from qdrant_client.models import Distance, FilterSelector, PointStruct, VectorParams

from ..core.embeddings import DEFAULT_EMBEDDING_MODEL, EmbeddingFunction, create_embedding_function
from ..core.models import DatabaseFields, NoteRecord, parse_row
from ..exceptions import TableInitializationError, TableNotInitializedError
from .base import VectorTable
from .batching import ChunkResult, ProgressCallback, write_in_chunks
from .factory import collection_name_for_directory
from .filters import Predicate

logger = logging.getLogger(__name__)


def point_id(note_path: str, sub_note_index: int) -> str:
    """Stable point id for a (path, sub-note index) pair."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{note_path}\x00{sub_note_index}"))


class NotesTable(VectorTable):
    """Single gateway to the Qdrant collection holding one directory's notes.

    Call :meth:`initialize` once before anything else; every other method
    raises :class:`TableNotInitializedError` until then.
    """

    def __init__(self) -> None:
        self.client: Optional[QdrantClient] = None
        self.collection_name: Optional[str] = None
        self.embed_fun: Optional[EmbeddingFunction] = None
        self.user_directory: Optional[str] = None

    def initialize(
        self,
        store_connection: QdrantClient,
        root_directory: Union[str, Path],
        embedding_function: Optional[EmbeddingFunction] = None,
    ) -> None:
        embed_fun = embedding_function or create_embedding_function(
            DEFAULT_EMBEDDING_MODEL, DatabaseFields.CONTENT
        )
        collection_name = collection_name_for_directory(root_directory)
        try:
            self._get_or_create_collection(store_connection, collection_name, embed_fun.ndims())
        except TableInitializationError:
            raise
        except Exception as e:
            raise TableInitializationError(
                f"Could not open or create collection '{collection_name}': {e}"
            ) from e

        self.client = store_connection
        self.collection_name = collection_name
        self.embed_fun = embed_fun
        self.user_directory = str(root_directory)
        logger.info(f"Initialized notes table '{collection_name}' for {root_directory}")

    @staticmethod
    def _get_or_create_collection(client: QdrantClient, collection_name: str, vector_dim: int) -> None:
        if not client.collection_exists(collection_name):
            client.create_collection(
                collection_name=collection_name,
                vectors_config=VectorParams(size=vector_dim, distance=Distance.COSINE),
            )
            logger.info(f"Created collection '{collection_name}' with dimension {vector_dim}")
            return

        info = client.get_collection(collection_name=collection_name)
        existing_dim = info.config.params.vectors.size
        if existing_dim != vector_dim:
            raise TableInitializationError(
                f"Collection '{collection_name}' exists with dimension {existing_dim}, "
                f"but the embedding function produces dimension {vector_dim}."
            )

    def _require_initialized(self, operation: str) -> None:
        if self.client is None or self.embed_fun is None:
            raise TableNotInitializedError(operation)

    def add(self, records: Sequence[NoteRecord], on_progress: Optional[ProgressCallback] = None) -> List[ChunkResult]:
        self._require_initialized("add")
        return write_in_chunks(self._insert_chunk, records, on_progress=on_progress)

    def _insert_chunk(self, chunk: List[NoteRecord]) -> None:
        # Embed the whole chunk before writing so a failure leaves no vectorless rows.
        payloads = [record.to_payload() for record in chunk]
        vectors = self.embed_fun.compute_source_embeddings(
            [payload[self.embed_fun.source_field] for payload in payloads]
        )
        points = [
            PointStruct(
                id=point_id(record.note_path, record.sub_note_index),
                vector=vector,
                payload=payload,
            )
            for record, payload, vector in zip(chunk, payloads, vectors)
        ]
        self.client.upsert(collection_name=self.collection_name, points=points, wait=True)

    def delete(self, predicate: Predicate) -> None:
        self._require_initialized("delete")
        logger.debug(f"Deleting rows where {predicate}")
        self.client.delete(
            collection_name=self.collection_name,
            points_selector=FilterSelector(filter=predicate.to_qdrant()),
            wait=True,
        )

    def search(self, query_text: str, limit: int, predicate: Optional[Predicate] = None) -> List[NoteRecord]:
        self._require_initialized("search")
        query_vector = self.embed_fun.compute_query_embedding(query_text)
        response = self.client.query_points(
            collection_name=self.collection_name,
            query=query_vector,
            limit=limit,
            query_filter=predicate.to_qdrant() if predicate else None,
            with_payload=True,
            with_vectors=True,
        )
        return self._to_records(response.points)

    def filter(self, predicate: Predicate, limit: int = 10) -> List[NoteRecord]:
        records, _ = self.filter_rows(predicate, limit)
        return records

    def filter_rows(self, predicate: Predicate, limit: int = 10) -> Tuple[List[NoteRecord], int]:
        """Like :meth:`filter`, also returning how many raw points matched.

        The count includes malformed points that were dropped from the records.
        """
        self._require_initialized("filter")
        if limit <= 0:
            return [], 0
        points, _ = self.client.scroll(
            collection_name=self.collection_name,
            scroll_filter=predicate.to_qdrant(),
            limit=limit,
            with_payload=True,
            with_vectors=True,
        )
        return self._to_records(points), len(points)

    def scan(self, predicate: Optional[Predicate] = None, page_size: int = 256) -> List[NoteRecord]:
        """Read every matching row by following scroll cursors until exhausted."""
        self._require_initialized("scan")
        records: List[NoteRecord] = []
        offset = None
        while True:
            points, next_offset = self.client.scroll(
                collection_name=self.collection_name,
                scroll_filter=predicate.to_qdrant() if predicate else None,
                limit=page_size,
                offset=offset,
                with_payload=True,
                with_vectors=True,
            )
            records.extend(self._to_records(points))
            if not points or next_offset is None:
                break
            offset = next_offset
        return records

    def count_rows(self) -> int:
        self._require_initialized("count_rows")
        return self.client.count(collection_name=self.collection_name, exact=True).count

    @staticmethod
    def _to_records(points: Iterable) -> List[NoteRecord]:
        records = []
        for point in points:
            row = dict(point.payload or {})
            row[DatabaseFields.VECTOR] = point.vector
            result = parse_row(row)
            if not result.ok:
                logger.debug(f"Dropping malformed row {point.id}: {result.error}")
                continue
            records.append(result.record)
        return records
