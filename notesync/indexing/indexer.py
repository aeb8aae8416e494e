"""Bringing a notes table into agreement with a directory."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..core.models import NoteRecord, now_timestamp
from ..storage.base import VectorTable
from ..storage.batching import ChunkResult, ProgressCallback
from ..storage.filters import content_empty, content_not_empty, path_equals
from ..utils.file_utils import FileInfo, FileInfoTree, flatten_file_info_tree, get_files_info_list
from .base import Indexer
from .convert import convert_files_to_records, convert_tree_to_records
from .reconcile import find_missing_files, find_stale_paths, get_table_as_array

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class SyncReport:
    """Summary of one repopulate pass."""

    files_seen: int
    files_added: int
    chunk_results: List[ChunkResult]
    row_count: int
    removed_paths: List[str] = dataclasses.field(default_factory=list)

    @property
    def failed_chunks(self) -> List[ChunkResult]:
        return [r for r in self.chunk_results if not r.ok]


def maybe_repopulate_table(
    table: VectorTable,
    directory_path: Union[str, Path],
    extensions_to_filter_for: Sequence[str],
    on_progress: Optional[ProgressCallback] = None,
) -> SyncReport:
    """Add every matching file under ``directory_path`` that has no row yet.

    Running it again over an unchanged directory writes nothing, since
    the missing set is recomputed from the live table each time.
    """
    files = get_files_info_list(directory_path, extensions_to_filter_for)
    rows = get_table_as_array(table)
    missing = find_missing_files(files, rows)
    logger.info(f"{len(missing)} of {len(files)} files are not in the table")

    chunk_results: List[ChunkResult] = []
    if missing:
        chunk_results = table.add(convert_files_to_records(missing), on_progress=on_progress)
    if on_progress:
        on_progress(1.0)

    row_count = table.count_rows()
    logger.info(f"Table row count is now {row_count}")
    return SyncReport(
        files_seen=len(files),
        files_added=len(missing),
        chunk_results=chunk_results,
        row_count=row_count,
    )


def remove_stale_rows_from_table(
    table: VectorTable,
    directory_path: Union[str, Path],
    extensions_to_filter_for: Sequence[str],
) -> List[str]:
    """Delete rows whose file no longer exists under ``directory_path``."""
    files = get_files_info_list(directory_path, extensions_to_filter_for)
    stale = find_stale_paths(files, get_table_as_array(table))
    for file_path in stale:
        table.delete(path_equals(file_path))
    if stale:
        logger.info(f"Removed {len(stale)} stale notes from the table")
    return stale


def populate_db_with_files(table: VectorTable, files_info: List[FileInfo]) -> List[ChunkResult]:
    return table.add(convert_files_to_records(files_info))


def add_tree_to_table(table: VectorTable, file_tree: FileInfoTree) -> List[ChunkResult]:
    return table.add(convert_tree_to_records(file_tree))


def remove_tree_from_table(table: VectorTable, file_tree: FileInfoTree) -> None:
    """Delete the rows of every file in ``file_tree``, one call per file.

    There is no rollback: a failure part way leaves earlier files deleted.
    """
    for file_info in flatten_file_info_tree(file_tree):
        table.delete(path_equals(file_info.path))


def update_note_in_table(table: VectorTable, file_path: str, content: str) -> List[ChunkResult]:
    """Replace the rows for ``file_path`` with one record holding ``content``.

    Not transactional: if the insert fails the note stays absent until the
    next repopulate pass.
    """
    logger.debug(f"Replacing {file_path} in table")
    table.delete(path_equals(file_path))
    return table.add(
        [
            NoteRecord(
                note_path=file_path,
                content=content,
                sub_note_index=0,
                time_added=now_timestamp(),
            )
        ]
    )


def delete_all_rows_in_table(table: VectorTable) -> None:
    """Best-effort wipe of every row; errors are logged, not raised."""
    try:
        table.delete(content_not_empty())
        table.delete(content_empty())
    except Exception as e:
        logger.error(f"Error deleting rows: {e}")


class DefaultIndexer(Indexer):

    def sync(self, table: VectorTable, directory: Path, cfg: Dict, on_progress: Optional[ProgressCallback] = None) -> SyncReport:
        extensions = cfg.get("extensions", [".md"])
        removed = remove_stale_rows_from_table(table, directory, extensions)
        report = maybe_repopulate_table(table, directory, extensions, on_progress=on_progress)
        report.removed_paths = removed
        return report


def sync_directory(
    table: VectorTable,
    directory: Path,
    cfg: Dict,
    on_progress: Optional[ProgressCallback] = None,
) -> SyncReport:
    """Remove stale rows then add missing files (Wrapper)."""
    indexer = DefaultIndexer()
    return indexer.sync(table, directory, cfg, on_progress=on_progress)
