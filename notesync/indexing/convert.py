"""Conversion of filesystem entries into note records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from ..core.models import NoteRecord, now_timestamp
from ..utils.file_utils import FileInfo, FileInfoTree, flatten_file_info_tree

logger = logging.getLogger(__name__)


def read_file(path: Union[str, Path]) -> str:
    """Read a note as UTF-8 text; unreadable files yield an empty string."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {path}: {e}")
        return ""


def convert_file_to_record(file: FileInfo) -> NoteRecord:
    return NoteRecord(
        note_path=file.path,
        content=read_file(file.path),
        sub_note_index=0,
        time_added=now_timestamp(),
    )


def convert_files_to_records(files: List[FileInfo]) -> List[NoteRecord]:
    return [convert_file_to_record(f) for f in files]


def convert_tree_to_records(tree: FileInfoTree) -> List[NoteRecord]:
    return convert_files_to_records(flatten_file_info_tree(tree))
