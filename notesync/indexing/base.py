"""Indexer Interface."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from ..storage.base import VectorTable
from ..storage.batching import ProgressCallback


class Indexer:
    """Abstract base class for directory indexing."""

    def sync(self, table: VectorTable, directory: Path, cfg: Dict, on_progress: Optional[ProgressCallback] = None):
        raise NotImplementedError
