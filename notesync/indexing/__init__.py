"""Indexing functionality for notesync."""

from .convert import convert_file_to_record, convert_tree_to_records, read_file
from .indexer import (
    DefaultIndexer,
    SyncReport,
    add_tree_to_table,
    delete_all_rows_in_table,
    maybe_repopulate_table,
    populate_db_with_files,
    remove_stale_rows_from_table,
    remove_tree_from_table,
    sync_directory,
    update_note_in_table,
)
from .reconcile import find_missing_files, find_stale_paths, get_table_as_array, is_file_in_db

__all__ = [
    "convert_file_to_record",
    "convert_tree_to_records",
    "read_file",
    "DefaultIndexer",
    "SyncReport",
    "add_tree_to_table",
    "delete_all_rows_in_table",
    "maybe_repopulate_table",
    "populate_db_with_files",
    "remove_stale_rows_from_table",
    "remove_tree_from_table",
    "sync_directory",
    "update_note_in_table",
    "find_missing_files",
    "find_stale_paths",
    "get_table_as_array",
    "is_file_in_db",
]
