"""Vector storage for notes (Qdrant only)."""

from .base import VectorTable
from .batching import CHUNK_SIZE, ChunkResult, write_in_chunks
from .factory import collection_name_for_directory, make_notes_table, make_store_connection
from .filters import Predicate, all_of, content_empty, content_not_empty, field_eq, field_ne, path_equals
from .qdrant import NotesTable

__all__ = [
    "VectorTable",
    "NotesTable",
    "CHUNK_SIZE",
    "ChunkResult",
    "write_in_chunks",
    "collection_name_for_directory",
    "make_notes_table",
    "make_store_connection",
    "Predicate",
    "all_of",
    "content_empty",
    "content_not_empty",
    "field_eq",
    "field_ne",
    "path_equals",
]
