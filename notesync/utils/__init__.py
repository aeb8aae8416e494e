"""Utility functions for notesync."""

from .file_utils import (
    FileInfo,
    FileInfoTree,
    ensure_dir,
    flatten_file_info_tree,
    get_files_info_list,
    get_files_info_tree,
)

__all__ = [
    "FileInfo",
    "FileInfoTree",
    "ensure_dir",
    "flatten_file_info_tree",
    "get_files_info_list",
    "get_files_info_tree",
]
