"""Diffing the filesystem listing against the rows already in a table."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..core.models import NoteRecord
from ..storage.base import VectorTable
from ..storage.filters import content_empty, content_not_empty, path_equals
from ..utils.file_utils import FileInfo

logger = logging.getLogger(__name__)


def get_table_as_array(table: VectorTable) -> List[NoteRecord]:
    """Materialize every row in ``table``.

    Rows are fetched as two partitions, non-empty and empty content, each
    bounded by the current row count. Coverage is checked on the raw
    number of matched points, so malformed rows (which are dropped from
    the result) do not count as missing. If the partitions do not add up
    to the row count the table is re-read with a paginated scan instead.
    """
    total_rows = table.count_rows()
    if total_rows == 0:
        return []

    non_empty, non_empty_matched = table.filter_rows(content_not_empty(), limit=total_rows)
    empty, empty_matched = table.filter_rows(content_empty(), limit=total_rows)
    rows = non_empty + empty
    matched = non_empty_matched + empty_matched
    if matched != total_rows:
        logger.warning(
            f"Content partitions matched {matched} rows but the table has {total_rows}; "
            f"falling back to a full scan"
        )
        rows = table.scan()
    return rows


def find_missing_files(files: Sequence[FileInfo], rows: Sequence[NoteRecord]) -> List[FileInfo]:
    """Files with no row in ``rows``, in listing order."""
    indexed_paths = {row.note_path for row in rows}
    return [f for f in files if f.path not in indexed_paths]


def find_stale_paths(files: Sequence[FileInfo], rows: Sequence[NoteRecord]) -> List[str]:
    """Row paths whose file is no longer in the listing, sorted."""
    on_disk = {f.path for f in files}
    return sorted({row.note_path for row in rows if row.note_path not in on_disk})


def is_file_in_db(table: VectorTable, file_path: str, table_count: int) -> bool:
    """Whether ``file_path`` has at least one row.

    ``table_count`` bounds the query so that large tables are fully
    covered; a zero count answers ``False`` without querying.
    """
    if table_count == 0:
        return False
    results = table.filter(path_equals(file_path), limit=table_count)
    return len(results) > 0
