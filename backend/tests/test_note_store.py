"""
NoteStore — Note Store Unit Tests
===================================

What:  Tests for NoteStore against a real temporary directory.
Why:   The existence preconditions (create needs absence, replace/delete need
       presence) and the listing's tolerance for bad entries are the whole
       contract of the service.

Test Strategy:
    ✅ Create/get/replace/delete round-trips through real files
    ✅ Precondition failures map to NoteExistsError / NotFoundError
    ✅ OS failures map to FileStorageError and leave no temp files behind
    ✅ Listing filters non-note files and drops unreadable entries
    ✅ Concurrent creates of one name: exactly one winner
"""

import asyncio
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import aiofiles
import pytest

from notestore.exceptions import (
    FileStorageError,
    NoteExistsError,
    NotFoundError,
    ValidationError,
)
from notestore.schemas.note import NoteItem
from notestore.services.note_store import NoteStore


class TestNotePath:
    """Tests for name → path mapping."""

    def test_joins_name_with_txt_suffix(self, note_store, storage_dir):
        assert note_store.note_path("groceries") == storage_dir / "groceries.txt"

    def test_dots_and_spaces_are_kept(self, note_store, storage_dir):
        assert note_store.note_path("v1.2 draft") == storage_dir / "v1.2 draft.txt"

    @pytest.mark.parametrize("name", ["", "../escape", "sub/note", "..\\escape", "nul\x00byte"])
    def test_names_escaping_directory_rejected(self, note_store, name):
        with pytest.raises(ValidationError):
            note_store.note_path(name)


class TestCreateAndGet:

    @pytest.mark.asyncio
    async def test_create_then_get_returns_text(self, note_store):
        await note_store.create_note("todo", "buy milk")
        assert await note_store.get_note("todo") == "buy milk"

    @pytest.mark.asyncio
    async def test_create_writes_raw_text_file(self, note_store, storage_dir):
        await note_store.create_note("todo", "line one\r\nline two\n")
        assert (storage_dir / "todo.txt").read_bytes() == b"line one\r\nline two\n"

    @pytest.mark.asyncio
    async def test_get_preserves_line_endings(self, note_store, storage_dir):
        (storage_dir / "crlf.txt").write_bytes(b"a\r\nb")
        assert await note_store.get_note("crlf") == "a\r\nb"

    @pytest.mark.asyncio
    async def test_create_existing_raises_and_keeps_original(self, note_store):
        await note_store.create_note("todo", "original")

        with pytest.raises(NoteExistsError):
            await note_store.create_note("todo", "replacement")

        assert await note_store.get_note("todo") == "original"

    @pytest.mark.asyncio
    async def test_create_empty_note(self, note_store):
        await note_store.create_note("empty", "")
        assert await note_store.get_note("empty") == ""

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, note_store):
        with pytest.raises(NotFoundError):
            await note_store.get_note("missing")

    @pytest.mark.asyncio
    async def test_get_invalid_utf8_is_replaced(self, note_store, storage_dir):
        (storage_dir / "binary.txt").write_bytes(b"ok \xff end")
        assert await note_store.get_note("binary") == "ok � end"

    @pytest.mark.asyncio
    async def test_get_directory_raises_storage_error(self, note_store, storage_dir):
        (storage_dir / "folder.txt").mkdir()
        with pytest.raises(FileStorageError):
            await note_store.get_note("folder")

    @pytest.mark.asyncio
    async def test_create_in_missing_directory_raises_storage_error(self, tmp_path):
        store = NoteStore(tmp_path / "does-not-exist")
        with pytest.raises(FileStorageError):
            await store.create_note("todo", "text")

    @pytest.mark.asyncio
    async def test_concurrent_creates_have_one_winner(self, note_store):
        results = await asyncio.gather(
            *(note_store.create_note("race", f"writer {i}") for i in range(5)),
            return_exceptions=True,
        )

        winners = [r for r in results if r is None]
        losers = [r for r in results if isinstance(r, NoteExistsError)]
        assert len(winners) == 1
        assert len(losers) == 4
        assert (await note_store.get_note("race")).startswith("writer ")


class TestReplace:

    @pytest.mark.asyncio
    async def test_replace_overwrites_not_appends(self, note_store):
        await note_store.create_note("todo", "a much longer original text")
        await note_store.replace_note("todo", "short")
        assert await note_store.get_note("todo") == "short"

    @pytest.mark.asyncio
    async def test_replace_missing_raises_not_found(self, note_store, storage_dir):
        with pytest.raises(NotFoundError):
            await note_store.replace_note("missing", "hello")
        assert not (storage_dir / "missing.txt").exists()

    @pytest.mark.asyncio
    async def test_replace_leaves_no_temp_files(self, note_store, storage_dir):
        await note_store.create_note("todo", "v1")
        await note_store.replace_note("todo", "v2")
        assert sorted(p.name for p in storage_dir.iterdir()) == ["todo.txt"]

    @pytest.mark.asyncio
    async def test_replace_rename_failure_keeps_original(self, note_store, storage_dir):
        await note_store.create_note("todo", "original")

        with patch("aiofiles.os.replace", AsyncMock(side_effect=PermissionError("denied"))):
            with pytest.raises(FileStorageError):
                await note_store.replace_note("todo", "new text")

        assert await note_store.get_note("todo") == "original"
        assert sorted(p.name for p in storage_dir.iterdir()) == ["todo.txt"]

    @pytest.mark.asyncio
    async def test_concurrent_replaces_leave_one_complete_version(self, note_store):
        await note_store.create_note("todo", "v0")
        versions = [f"version {i} " * 50 for i in range(5)]

        await asyncio.gather(*(note_store.replace_note("todo", v) for v in versions))

        assert await note_store.get_note("todo") in versions


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_file(self, note_store, storage_dir):
        await note_store.create_note("todo", "text")
        await note_store.delete_note("todo")

        assert not (storage_dir / "todo.txt").exists()
        with pytest.raises(NotFoundError):
            await note_store.get_note("todo")

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self, note_store):
        with pytest.raises(NotFoundError):
            await note_store.delete_note("missing")

    @pytest.mark.asyncio
    async def test_delete_os_error_raises_storage_error(self, note_store):
        await note_store.create_note("todo", "text")
        with patch("aiofiles.os.remove", AsyncMock(side_effect=PermissionError("denied"))):
            with pytest.raises(FileStorageError):
                await note_store.delete_note("todo")


class TestList:

    @pytest.mark.asyncio
    async def test_empty_directory_lists_nothing(self, note_store):
        assert await note_store.list_notes() == []

    @pytest.mark.asyncio
    async def test_lists_notes_sorted_by_name(self, note_store):
        await note_store.create_note("b", "y")
        await note_store.create_note("a", "x")

        assert await note_store.list_notes() == [
            NoteItem(name="a", text="x"),
            NoteItem(name="b", text="y"),
        ]

    @pytest.mark.asyncio
    async def test_ignores_files_without_txt_suffix(self, note_store, storage_dir):
        await note_store.create_note("kept", "x")
        (storage_dir / "image.png").write_bytes(b"\x89PNG")
        (storage_dir / ".kept.txt.abcd1234.tmp").write_text("partial")

        assert [n.name for n in await note_store.list_notes()] == ["kept"]

    @pytest.mark.asyncio
    async def test_directory_named_like_note_is_skipped_quietly(
        self, note_store, storage_dir, caplog
    ):
        await note_store.create_note("good", "x")
        (storage_dir / "folder.txt").mkdir()

        with caplog.at_level(logging.WARNING, logger="notestore.services.note_store"):
            assert await note_store.list_notes() == [NoteItem(name="good", text="x")]

        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    @pytest.mark.asyncio
    async def test_unreadable_entry_is_dropped(self, note_store, caplog):
        await note_store.create_note("good", "x")
        await note_store.create_note("bad", "y")
        real_open = aiofiles.open

        def failing_open(path, *args, **kwargs):
            if Path(path).name == "bad.txt":
                raise PermissionError("denied")
            return real_open(path, *args, **kwargs)

        with patch("aiofiles.open", side_effect=failing_open):
            with caplog.at_level(logging.WARNING, logger="notestore.services.note_store"):
                assert await note_store.list_notes() == [NoteItem(name="good", text="x")]

        assert any("bad.txt" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_deleted_note_disappears(self, note_store):
        await note_store.create_note("a", "x")
        await note_store.create_note("b", "y")
        await note_store.delete_note("a")

        assert [n.name for n in await note_store.list_notes()] == ["b"]

    @pytest.mark.asyncio
    async def test_missing_directory_raises_storage_error(self, tmp_path):
        store = NoteStore(tmp_path / "does-not-exist")
        with pytest.raises(FileStorageError):
            await store.list_notes()


class TestStorageDirectory:

    @pytest.mark.asyncio
    async def test_ensure_storage_dir_creates_parents(self, tmp_path):
        store = NoteStore(tmp_path / "a" / "b" / "notes")
        await store.ensure_storage_dir()
        assert (tmp_path / "a" / "b" / "notes").is_dir()

    @pytest.mark.asyncio
    async def test_status_available(self, note_store):
        assert await note_store.storage_status() == "available"

    @pytest.mark.asyncio
    async def test_status_missing(self, tmp_path):
        store = NoteStore(tmp_path / "nope")
        assert await store.storage_status() == "missing"

    @pytest.mark.asyncio
    async def test_status_read_only(self, note_store):
        with patch("aiofiles.os.access", AsyncMock(return_value=False)):
            assert await note_store.storage_status() == "read_only"
