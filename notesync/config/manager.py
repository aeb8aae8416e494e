"""Configuration management for notesync."""

from __future__ import annotations

import copy
import os
from typing import Dict, List


DEFAULT_EXTENSIONS: List[str] = [".md"]

DEFAULT_CONFIG: Dict = {
    "extensions": DEFAULT_EXTENSIONS,
    "embedding": {
        "backend": "sentence_transformers",
        "sentence_transformers_model": "BAAI/bge-base-en-v1.5",
    },
    "vector_store": {
        "qdrant": {
            "host": "localhost",
            "port": 6333,
            # Embedded on-disk storage; takes precedence over host/port when set.
            "path": None,
            # e.g. ":memory:"; takes precedence over path.
            "location": None,
            "timeout": None,
        },
    },
}


def parse_extensions(value: str) -> List[str]:
    """Parse a comma separated extension list, e.g. ``"md, .txt"``."""
    out: List[str] = []
    for part in value.split(","):
        part = part.strip().lower()
        if not part:
            continue
        if not part.startswith("."):
            part = "." + part
        if part not in out:
            out.append(part)
    return out


def load_config() -> Dict:
    """Load configuration.

    Returns a copy of the default configuration with environment overrides
    applied.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    qdrant = config["vector_store"]["qdrant"]

    qdrant["host"] = os.getenv("NOTESYNC_QDRANT_HOST", qdrant["host"])
    qdrant["port"] = int(os.getenv("NOTESYNC_QDRANT_PORT", str(qdrant["port"])))
    qdrant["path"] = os.getenv("NOTESYNC_QDRANT_PATH") or qdrant["path"]
    qdrant["location"] = os.getenv("NOTESYNC_QDRANT_LOCATION") or qdrant["location"]

    extensions = os.getenv("NOTESYNC_EXTENSIONS")
    if extensions:
        config["extensions"] = parse_extensions(extensions)

    model = os.getenv("NOTESYNC_EMBEDDING_MODEL")
    if model:
        config["embedding"]["sentence_transformers_model"] = model

    return config
