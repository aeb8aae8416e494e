"""notesync: keep a directory of notes in sync with a Qdrant vector table."""

from .core import NoteRecord, DatabaseFields
from .storage import NotesTable
from .indexing import (
    maybe_repopulate_table,
    add_tree_to_table,
    remove_tree_from_table,
    update_note_in_table,
)

__all__ = [
    "NoteRecord",
    "DatabaseFields",
    "NotesTable",
    "maybe_repopulate_table",
    "add_tree_to_table",
    "remove_tree_from_table",
    "update_note_in_table",
]
