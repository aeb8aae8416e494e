"""Tests for configuration loading and the store factory."""

from qdrant_client import QdrantClient

from notesync.config import DEFAULT_CONFIG, load_config, parse_extensions
from notesync.core import embeddings
from notesync.storage.factory import collection_name_for_directory, make_notes_table, make_store_connection

from .conftest import FAKE_DIM, FakeEmbedder


def test_defaults(monkeypatch):
    for var in ("NOTESYNC_QDRANT_HOST", "NOTESYNC_QDRANT_PORT", "NOTESYNC_QDRANT_PATH",
                "NOTESYNC_QDRANT_LOCATION", "NOTESYNC_EXTENSIONS", "NOTESYNC_EMBEDDING_MODEL"):
        monkeypatch.delenv(var, raising=False)

    cfg = load_config()

    assert cfg["extensions"] == [".md"]
    assert cfg["embedding"]["sentence_transformers_model"] == "BAAI/bge-base-en-v1.5"
    assert cfg["vector_store"]["qdrant"]["host"] == "localhost"
    assert cfg["vector_store"]["qdrant"]["port"] == 6333
    assert set(cfg) == {"extensions", "embedding", "vector_store"}
    assert set(cfg["vector_store"]) == {"qdrant"}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("NOTESYNC_QDRANT_HOST", "qdrant.internal")
    monkeypatch.setenv("NOTESYNC_QDRANT_PORT", "7000")
    monkeypatch.setenv("NOTESYNC_EXTENSIONS", "md, .TXT,md")

    cfg = load_config()

    assert cfg["vector_store"]["qdrant"]["host"] == "qdrant.internal"
    assert cfg["vector_store"]["qdrant"]["port"] == 7000
    assert cfg["extensions"] == [".md", ".txt"]


def test_load_config_does_not_mutate_defaults(monkeypatch):
    monkeypatch.setenv("NOTESYNC_QDRANT_HOST", "elsewhere")
    cfg = load_config()
    cfg["extensions"].append(".org")

    assert DEFAULT_CONFIG["vector_store"]["qdrant"]["host"] == "localhost"
    assert DEFAULT_CONFIG["extensions"] == [".md"]


def test_parse_extensions_ignores_blanks():
    assert parse_extensions(" , md,, ") == [".md"]


def test_collection_name_is_stable_and_directory_scoped(tmp_path):
    one = tmp_path / "My Notes"
    two = tmp_path / "other" / "My Notes"

    name = collection_name_for_directory(one)

    assert name == collection_name_for_directory(one)
    assert name != collection_name_for_directory(two)
    assert name.startswith("My_Notes_")


def test_collection_name_for_non_alpha_directory(tmp_path):
    assert collection_name_for_directory(tmp_path / "2024").startswith("_2024_")


def test_make_store_connection_in_memory():
    client = make_store_connection({"vector_store": {"qdrant": {"location": ":memory:"}}})
    try:
        assert isinstance(client, QdrantClient)
        assert client.get_collections().collections == []
    finally:
        client.close()


def test_make_store_connection_local_path(tmp_path):
    path = tmp_path / "store"
    client = make_store_connection({"vector_store": {"qdrant": {"path": str(path)}}})
    try:
        assert path.is_dir()
    finally:
        client.close()


def test_make_notes_table_from_config(monkeypatch, notes_dir):
    loaded = []

    def fake_sentence_transformers(model_name):
        loaded.append(model_name)
        return FakeEmbedder()

    monkeypatch.setattr(embeddings, "SentenceTransformersEmbedder", fake_sentence_transformers)
    monkeypatch.setenv("NOTESYNC_QDRANT_LOCATION", ":memory:")
    monkeypatch.setenv("NOTESYNC_EMBEDDING_MODEL", "test/model")
    cfg = load_config()

    table = make_notes_table(cfg, notes_dir)
    try:
        assert loaded == ["test/model"]
        assert table.embed_fun.model_id == "test/model"
        assert table.embed_fun.source_field == "content"
        assert table.embed_fun.ndims() == FAKE_DIM
        assert table.collection_name == collection_name_for_directory(notes_dir)
        assert table.count_rows() == 0
    finally:
        table.client.close()
