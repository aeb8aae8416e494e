"""Factory helpers for the Qdrant connection and per-directory tables."""

from __future__ import annotations

import hashlib
import re
from pathlib import Path
from typing import Dict, Optional, Union

from qdrant_client import QdrantClient

from ..utils.file_utils import ensure_dir


def collection_name_for_directory(directory: Union[str, Path]) -> str:
    """Collection name scoped to ``directory``.

    Readable directory name plus a short hash of the resolved path, so two
    folders with the same name never share a collection.
    """
    path = Path(directory).expanduser().resolve()
    name = re.sub(r'[^a-zA-Z0-9_-]', '_', path.name) or "root"
    if not name[0].isalpha() and name[0] != '_':
        name = '_' + name
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:12]
    return f"{name}_{digest}"


def make_store_connection(cfg: Dict) -> QdrantClient:
    """Build a Qdrant client from ``cfg["vector_store"]["qdrant"]``.

    ``location`` (e.g. ``":memory:"``) wins over ``path`` (embedded on-disk
    storage), which wins over ``host``/``port``.
    """
    qdrant_cfg = cfg.get("vector_store", {}).get("qdrant", {})
    location: Optional[str] = qdrant_cfg.get("location")
    path: Optional[str] = qdrant_cfg.get("path")

    if location:
        return QdrantClient(location=location)
    if path:
        ensure_dir(Path(path))
        return QdrantClient(path=path)

    host = qdrant_cfg.get("host", "localhost")
    port = qdrant_cfg.get("port", 6333)
    timeout = qdrant_cfg.get("timeout")
    return QdrantClient(host=host, port=port, timeout=timeout)


def make_notes_table(cfg: Dict, directory: Union[str, Path], client: Optional[QdrantClient] = None):
    """Create and initialize a :class:`NotesTable` for ``directory``."""
    from ..core.embeddings import make_embedding_function
    from .qdrant import NotesTable

    table = NotesTable()
    table.initialize(
        client if client is not None else make_store_connection(cfg),
        directory,
        embedding_function=make_embedding_function(cfg),
    )
    return table
