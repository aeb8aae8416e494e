"""Shared fixtures: an in-memory Qdrant store and a deterministic embedder."""

import hashlib
from pathlib import Path
from typing import List

import pytest
from qdrant_client import QdrantClient

from notesync.core.embeddings import Embedder, create_embedding_function
from notesync.storage.qdrant import NotesTable

FAKE_DIM = 8


class FakeEmbedder(Embedder):
    """Hash-based embedder: identical texts get identical vectors."""

    def __init__(self, dim: int = FAKE_DIM, fail_on: str = None):
        self._dim = dim
        self.fail_on = fail_on
        self.calls: List[List[str]] = []

    def embed(self, texts):
        self.calls.append(list(texts))
        if self.fail_on is not None and any(self.fail_on in t for t in texts):
            raise RuntimeError(f"embedding failed for {self.fail_on!r}")
        return [self._vector(t) for t in texts]

    def _vector(self, text):
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        return [b / 255.0 + 0.01 for b in digest[: self._dim]]

    @property
    def dimension(self):
        return self._dim


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def client():
    c = QdrantClient(location=":memory:")
    yield c
    c.close()


@pytest.fixture
def notes_dir(tmp_path) -> Path:
    d = tmp_path / "notes"
    d.mkdir()
    return d


def make_table(client, directory, embedder) -> NotesTable:
    table = NotesTable()
    table.initialize(
        client,
        directory,
        embedding_function=create_embedding_function("fake-model", "content", embedder=embedder),
    )
    return table


@pytest.fixture
def table(client, notes_dir, embedder) -> NotesTable:
    return make_table(client, notes_dir, embedder)


def write_note(directory: Path, relative: str, text: str) -> Path:
    path = directory / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
