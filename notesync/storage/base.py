"""Abstract notes table interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..core.models import NoteRecord
from .batching import ChunkResult, ProgressCallback
from .filters import Predicate


class VectorTable(ABC):
    """Abstract base class for an embedding-backed table of notes."""

    @abstractmethod
    def add(self, records: Sequence[NoteRecord], on_progress: Optional[ProgressCallback] = None) -> List[ChunkResult]:
        """Embed and write records in chunks."""
        pass

    @abstractmethod
    def delete(self, predicate: Predicate) -> None:
        """Delete every row matching the predicate."""
        pass

    @abstractmethod
    def search(self, query_text: str, limit: int, predicate: Optional[Predicate] = None) -> List[NoteRecord]:
        """Nearest-neighbour search for the query text."""
        pass

    @abstractmethod
    def filter(self, predicate: Predicate, limit: int = 10) -> List[NoteRecord]:
        """Metadata-only query, not ranked by similarity."""
        pass

    @abstractmethod
    def filter_rows(self, predicate: Predicate, limit: int = 10) -> Tuple[List[NoteRecord], int]:
        """Metadata-only query returning records and the raw number of matches."""
        pass

    @abstractmethod
    def count_rows(self) -> int:
        """Count rows in the table."""
        pass

    @abstractmethod
    def scan(self, predicate: Optional[Predicate] = None, page_size: int = 256) -> List[NoteRecord]:
        """Read every matching row, paging until the store is exhausted."""
        pass
