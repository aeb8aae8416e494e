"""Tests for repopulation and point updates."""

import os
from unittest import mock

from notesync.core.models import NoteRecord
from notesync.indexing.indexer import (
    add_tree_to_table,
    delete_all_rows_in_table,
    maybe_repopulate_table,
    populate_db_with_files,
    remove_stale_rows_from_table,
    remove_tree_from_table,
    sync_directory,
    update_note_in_table,
)
from notesync.indexing.reconcile import is_file_in_db
from notesync.storage.filters import path_equals
from notesync.utils.file_utils import get_files_info_list, get_files_info_tree

from .conftest import write_note


def test_repopulate_then_remove_deleted_file(table, notes_dir):
    a = write_note(notes_dir, "a.md", "alpha")
    write_note(notes_dir, "b.md", "beta")

    maybe_repopulate_table(table, notes_dir, [".md"])
    assert table.count_rows() == 2

    a.unlink()
    removed = remove_stale_rows_from_table(table, notes_dir, [".md"])

    assert removed == [str(a)]
    assert table.count_rows() == 1
    assert is_file_in_db(table, str(a), table.count_rows()) is False


def test_repopulate_is_idempotent(table, notes_dir):
    for i in range(3):
        write_note(notes_dir, f"{i}.md", f"note {i}")

    first = maybe_repopulate_table(table, notes_dir, [".md"])
    assert first.files_added == 3

    with mock.patch.object(table.client, "upsert", wraps=table.client.upsert) as upsert:
        second = maybe_repopulate_table(table, notes_dir, [".md"])

    upsert.assert_not_called()
    assert second.files_added == 0
    assert second.chunk_results == []
    assert second.row_count == 3


def test_repopulate_covers_every_matching_file(table, notes_dir):
    paths = [write_note(notes_dir, f"dir{i % 4}/note{i}.md", f"body {i}") for i in range(75)]
    write_note(notes_dir, "ignored.txt", "not a note")
    write_note(notes_dir, ".hidden/secret.md", "hidden")

    report = maybe_repopulate_table(table, notes_dir, [".md"])

    assert report.files_seen == 75
    assert report.failed_chunks == []
    count = table.count_rows()
    assert count == 75
    assert all(is_file_in_db(table, str(p), count) for p in paths)


def test_repopulate_only_adds_missing_files(table, notes_dir, embedder):
    write_note(notes_dir, "a.md", "alpha")
    maybe_repopulate_table(table, notes_dir, [".md"])
    write_note(notes_dir, "b.md", "beta")
    embedder.calls.clear()

    report = maybe_repopulate_table(table, notes_dir, [".md"])

    assert report.files_added == 1
    assert embedder.calls == [["beta"]]
    assert table.count_rows() == 2


def test_repopulate_progress_ends_with_terminal_signal(table, notes_dir):
    for i in range(120):
        write_note(notes_dir, f"{i:03d}.md", f"note {i}")
    progress = []

    maybe_repopulate_table(table, notes_dir, [".md"], on_progress=progress.append)

    # Three chunks, then the explicit final 1.0.
    assert progress == [1 / 3, 2 / 3, 1.0, 1.0]


def test_repopulate_with_nothing_to_add_still_reports_completion(table, notes_dir):
    progress = []
    report = maybe_repopulate_table(table, notes_dir, [".md"], on_progress=progress.append)

    assert progress == [1.0]
    assert report.row_count == 0


def test_repopulate_indexes_unreadable_files_with_empty_content(table, notes_dir):
    (notes_dir / "bad.md").write_bytes(b"\xff\xfe\x00 not utf-8 \xff")

    maybe_repopulate_table(table, notes_dir, [".md"])

    [row] = table.filter(path_equals(str(notes_dir / "bad.md")))
    assert row.content == ""


def test_update_note_replaces_row(table, notes_dir):
    path = str(write_note(notes_dir, "a.md", "old text"))
    maybe_repopulate_table(table, notes_dir, [".md"])
    [before] = table.filter(path_equals(path))

    update_note_in_table(table, path, "new text")

    rows = table.filter(path_equals(path), limit=table.count_rows())
    assert len(rows) == 1
    assert rows[0].content == "new text"
    assert rows[0].time_added > before.time_added


def test_update_note_clears_extra_sub_notes(table):
    table.add(
        [
            NoteRecord(note_path="/n/a.md", content="part 0", sub_note_index=0),
            NoteRecord(note_path="/n/a.md", content="part 1", sub_note_index=1),
        ]
    )

    update_note_in_table(table, "/n/a.md", "whole")

    rows = table.filter(path_equals("/n/a.md"), limit=10)
    assert [(r.sub_note_index, r.content) for r in rows] == [(0, "whole")]


def test_update_note_inserts_when_absent(table):
    update_note_in_table(table, "/n/new.md", "fresh")
    assert table.count_rows() == 1


def test_add_and_remove_tree(table, notes_dir):
    write_note(notes_dir, "top.md", "top")
    write_note(notes_dir, "sub/one.md", "one")
    write_note(notes_dir, "sub/deeper/two.md", "two")
    tree = get_files_info_tree(notes_dir, [".md"])

    add_tree_to_table(table, tree)
    assert table.count_rows() == 3

    sub_tree = [node for node in tree if node.name == "sub"]
    with mock.patch.object(table, "delete", wraps=table.delete) as delete:
        remove_tree_from_table(table, sub_tree)

    assert delete.call_count == 2
    assert [r.note_path for r in table.scan()] == [str(notes_dir / "top.md")]


def test_populate_db_with_files(table, notes_dir):
    write_note(notes_dir, "a.md", "a")
    write_note(notes_dir, "b.md", "")

    results = populate_db_with_files(table, get_files_info_list(notes_dir, [".md"]))

    assert [r.ok for r in results] == [True]
    assert table.count_rows() == 2


def test_delete_all_rows(table):
    table.add([NoteRecord(note_path="/n/a.md", content="a"), NoteRecord(note_path="/n/b.md", content="")])

    delete_all_rows_in_table(table)

    assert table.count_rows() == 0


def test_delete_all_rows_swallows_store_errors(table):
    with mock.patch.object(table, "delete", side_effect=RuntimeError("store down")):
        delete_all_rows_in_table(table)


def test_sync_directory_prunes_and_adds(table, notes_dir):
    old = write_note(notes_dir, "old.md", "old")
    sync_directory(table, notes_dir, {"extensions": [".md"]})
    old.unlink()
    write_note(notes_dir, "new.md", "new")

    report = sync_directory(table, notes_dir, {"extensions": [".md"]})

    assert report.removed_paths == [str(old)]
    assert report.files_added == 1
    assert [r.note_path for r in table.scan()] == [str(notes_dir / "new.md")]


def test_repopulate_through_symlink_loop_indexes_note_once(table, notes_dir):
    write_note(notes_dir, "a.md", "alpha")
    os.symlink(notes_dir, notes_dir / "loop")

    report = maybe_repopulate_table(table, notes_dir, [".md"])

    assert report.files_seen == 1
    assert table.count_rows() == 1
