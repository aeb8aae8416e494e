"""Chunked, fault-isolated writes of records to a table."""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, List, Optional, Sequence

from ..core.models import NoteRecord

logger = logging.getLogger(__name__)

CHUNK_SIZE = 50

ProgressCallback = Callable[[float], None]


@dataclasses.dataclass
class ChunkResult:
    """Outcome of writing one chunk."""

    index: int
    size: int
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def split_into_chunks(records: Sequence[NoteRecord], chunk_size: int = CHUNK_SIZE) -> List[List[NoteRecord]]:
    return [list(records[i:i + chunk_size]) for i in range(0, len(records), chunk_size)]


def write_in_chunks(
    insert: Callable[[List[NoteRecord]], None],
    records: Sequence[NoteRecord],
    on_progress: Optional[ProgressCallback] = None,
    chunk_size: int = CHUNK_SIZE,
) -> List[ChunkResult]:
    """Write ``records`` through ``insert`` one chunk at a time.

    A failing chunk is logged and recorded, and the remaining chunks are
    still attempted. ``on_progress`` receives ``completed / total`` after
    every chunk, successful or not. Returns one :class:`ChunkResult` per
    chunk in input order.
    """
    chunks = split_into_chunks(records, chunk_size)
    total_chunks = len(chunks)
    logger.info(f"Writing {len(records)} records in {total_chunks} chunks")

    results: List[ChunkResult] = []
    for index, chunk in enumerate(chunks):
        result = ChunkResult(index=index, size=len(chunk))
        try:
            insert(chunk)
            logger.debug(f"Wrote chunk {index + 1}/{total_chunks}")
        except Exception as e:
            logger.error(f"Error adding chunk {index + 1}/{total_chunks} to table: {e}")
            result.error = e
        results.append(result)
        if on_progress:
            on_progress((index + 1) / total_chunks)

    failed = sum(1 for r in results if not r.ok)
    if failed:
        logger.warning(f"{failed}/{total_chunks} chunks failed to write")
    return results
