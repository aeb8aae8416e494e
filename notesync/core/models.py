"""Data models for notesync."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import threading
from typing import Any, Dict, List, NamedTuple, Optional

from ..exceptions import RowShapeError


class DatabaseFields:
    """Logical field identifiers stored in the table."""

    NOTE_PATH = "notepath"
    VECTOR = "vector"
    CONTENT = "content"
    SUB_NOTE_INDEX = "subnoteindex"
    TIME_ADDED = "timeadded"

    REQUIRED = (NOTE_PATH, VECTOR, CONTENT, SUB_NOTE_INDEX, TIME_ADDED)
    # Fields that live in the point payload (the vector is stored on the point itself).
    PAYLOAD = (NOTE_PATH, CONTENT, SUB_NOTE_INDEX, TIME_ADDED)


_stamp_lock = threading.Lock()
_last_stamp: Optional[_dt.datetime] = None


def now_timestamp() -> _dt.datetime:
    """Return the current UTC time, strictly later than any previous call."""
    global _last_stamp
    with _stamp_lock:
        stamp = _dt.datetime.now(_dt.timezone.utc)
        if _last_stamp is not None and stamp <= _last_stamp:
            stamp = _last_stamp + _dt.timedelta(microseconds=1)
        _last_stamp = stamp
        return stamp


@dataclasses.dataclass
class NoteRecord:
    """One indexable unit: a note file plus its embedding and metadata.

    ``vector`` is filled in by the table's embedding function on write and
    by the store on read; callers never set it.
    """

    note_path: str
    content: str
    sub_note_index: int = 0
    time_added: _dt.datetime = dataclasses.field(default_factory=now_timestamp)
    vector: Optional[List[float]] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            DatabaseFields.NOTE_PATH: self.note_path,
            DatabaseFields.CONTENT: self.content,
            DatabaseFields.SUB_NOTE_INDEX: self.sub_note_index,
            DatabaseFields.TIME_ADDED: self.time_added.isoformat(),
        }


class RowParseResult(NamedTuple):
    """Outcome of :func:`parse_row`: exactly one of ``record``/``error`` is set."""

    record: Optional[NoteRecord]
    error: Optional[RowShapeError]

    @property
    def ok(self) -> bool:
        return self.record is not None


def parse_row(row: Dict[str, Any]) -> RowParseResult:
    """Turn a raw store row into a :class:`NoteRecord`.

    The row must carry all five required fields; anything else is reported
    as a :class:`RowShapeError` instead of being surfaced as a record.
    """
    missing = [f for f in DatabaseFields.REQUIRED if row.get(f) is None]
    if missing:
        return RowParseResult(None, RowShapeError(missing))

    time_added = row[DatabaseFields.TIME_ADDED]
    if isinstance(time_added, str):
        try:
            time_added = _dt.datetime.fromisoformat(time_added)
        except ValueError:
            return RowParseResult(None, RowShapeError([DatabaseFields.TIME_ADDED]))

    return RowParseResult(
        NoteRecord(
            note_path=row[DatabaseFields.NOTE_PATH],
            content=row[DatabaseFields.CONTENT],
            sub_note_index=int(row[DatabaseFields.SUB_NOTE_INDEX]),
            time_added=time_added,
            vector=list(row[DatabaseFields.VECTOR]),
        ),
        None,
    )
