"""
NoteStore — File-Backed Note Store
====================================

What:  Reads, writes, replaces, deletes and lists notes stored as
       `<storage_dir>/<name>.txt` files.
Why:   The storage directory is the only source of truth. Keeping every
       filesystem call in one class lets routes stay thin and lets tests
       exercise the storage rules without HTTP.
How:   Async file I/O through aiofiles; OS errors are translated into the
       application exception hierarchy (NotFoundError, NoteExistsError,
       FileStorageError) which main.py maps to status codes.
Who:   One instance per app, created by create_app() and injected into routes.
When:  On every note request. Nothing is cached between requests.

Existence preconditions:
    create   → file must NOT exist (else NoteExistsError → 400)
    replace  → file MUST exist     (else NotFoundError → 404)
    delete   → file MUST exist     (else NotFoundError → 404)
    get      → file MUST exist     (else NotFoundError → 404)

Concurrency:
    A plain "check, then act" sequence lets two concurrent creates of the same
    name both pass the check. The store closes that window with:
    1. Exclusive-create mode ("x") for create: the OS refuses the second open
    2. Write-to-temp + atomic rename for replace: readers never see half a note
    3. A per-path asyncio.Lock around create/replace/delete in this process
    Reads and listings never take a lock.
"""

import asyncio
import logging
import os
import uuid
import weakref
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from notestore.exceptions import (
    FileStorageError,
    NoteExistsError,
    NotFoundError,
    ValidationError,
)
from notestore.schemas.note import NoteItem

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".txt"
ENCODING = "utf-8"

# Characters that would let a name address a file outside the storage directory
FORBIDDEN_NAME_CHARS = ("/", "\\", "\x00")


class NoteStore:
    """
    Async note repository over a flat directory of `.txt` files.

    On-disk layout:
        storage_dir/
        ├── groceries.txt
        ├── todo.txt
        └── .todo.txt.3f9a1c2e.tmp   (only while a replace is in flight)

    Content is the raw note text in UTF-8, no header and no metadata.
    Newlines are written and read untranslated.
    """

    def __init__(self, storage_dir: Path):
        self.storage_dir = Path(storage_dir)
        # Entries vanish once no request holds the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    # ── Paths & locks ─────────────────────────────────────────────────────

    def note_path(self, name: str) -> Path:
        """
        Map a note name to its file path.

        The name is joined as given; only names that would escape the storage
        directory are refused.

        Raises:
            ValidationError: empty name, or name containing a path separator
                             or NUL byte
        """
        if not name or any(ch in name for ch in FORBIDDEN_NAME_CHARS):
            raise ValidationError(
                message="Note names must be non-empty and must not contain '/', '\\' or NUL.",
                field="name",
                context={"name": name},
            )
        return self.storage_dir / f"{name}{NOTE_SUFFIX}"

    def _lock_for(self, path: Path) -> asyncio.Lock:
        key = str(path)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def _discard(self, path: Path) -> None:
        """Best-effort removal of a partial or temporary file."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to clean up %s: %s", path.name, str(e))

    # ── Operations ────────────────────────────────────────────────────────

    async def get_note(self, name: str) -> str:
        """
        Return the full text of a note.

        Raises:
            NotFoundError:    no `<name>.txt` in the storage directory
            FileStorageError: any other read failure
        """
        path = self.note_path(name)
        try:
            async with aiofiles.open(
                path, "r", encoding=ENCODING, errors="replace", newline=""
            ) as f:
                return await f.read()
        except FileNotFoundError:
            raise NotFoundError(resource="note", resource_id=name) from None
        except OSError as e:
            logger.error("Failed to read note %s: %s", path, str(e))
            raise FileStorageError(
                message="Could not read the note.",
                context={"path": str(path), "os_error": str(e)},
            )

    async def create_note(self, name: str, text: str) -> None:
        """
        Create a new note. Fails if a note with this name already exists.

        How:
            The file is opened in exclusive-create mode, so the existence check
            and the creation are a single OS call. A write failure after the
            open removes the partial file again.

        Raises:
            NoteExistsError:  `<name>.txt` is already present
            FileStorageError: the file could not be written
        """
        path = self.note_path(name)
        async with self._lock_for(path):
            opened = False
            try:
                async with aiofiles.open(path, "x", encoding=ENCODING, newline="") as f:
                    opened = True
                    await f.write(text)
            except FileExistsError:
                raise NoteExistsError(name) from None
            except OSError as e:
                if opened:
                    await self._discard(path)
                logger.error("Failed to create note %s: %s", path, str(e))
                raise FileStorageError(
                    message="Could not save the note.",
                    context={"path": str(path), "os_error": str(e)},
                )

        logger.info("Note created: %s (%d chars)", name, len(text))

    async def replace_note(self, name: str, text: str) -> None:
        """
        Overwrite an existing note with new text (full replacement, not append).

        How:
            1. stat() the note; a missing file is a 404
            2. Write the new text to a hidden temp file in the same directory
            3. os.replace() it over the note (atomic on POSIX and Windows)

        Raises:
            NotFoundError:    `<name>.txt` does not exist
            FileStorageError: stat, write or rename failed
        """
        path = self.note_path(name)
        async with self._lock_for(path):
            try:
                await aiofiles.os.stat(path)
            except FileNotFoundError:
                raise NotFoundError(resource="note", resource_id=name) from None
            except OSError as e:
                logger.error("Failed to stat note %s: %s", path, str(e))
                raise FileStorageError(
                    message="Could not update the note.",
                    context={"path": str(path), "os_error": str(e)},
                )

            tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
            try:
                async with aiofiles.open(tmp_path, "w", encoding=ENCODING, newline="") as f:
                    await f.write(text)
                await aiofiles.os.replace(tmp_path, path)
            except OSError as e:
                await self._discard(tmp_path)
                logger.error("Failed to replace note %s: %s", path, str(e))
                raise FileStorageError(
                    message="Could not update the note.",
                    context={"path": str(path), "os_error": str(e)},
                )

        logger.info("Note replaced: %s (%d chars)", name, len(text))

    async def delete_note(self, name: str) -> None:
        """
        Remove a note.

        Raises:
            NotFoundError:    `<name>.txt` does not exist
            FileStorageError: the file could not be removed
        """
        path = self.note_path(name)
        async with self._lock_for(path):
            try:
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                raise NotFoundError(resource="note", resource_id=name) from None
            except OSError as e:
                logger.error("Failed to delete note %s: %s", path, str(e))
                raise FileStorageError(
                    message="Could not delete the note.",
                    context={"path": str(path), "os_error": str(e)},
                )

        logger.info("Note deleted: %s", name)

    async def list_notes(self) -> List[NoteItem]:
        """
        Return every note in the storage directory, sorted by name.

        What:    Enumerates `*.txt` entries and reads each one concurrently.
        Why tolerant: A note deleted or made unreadable between the directory
                 scan and the read is dropped from the result instead of
                 failing the whole listing.

        Raises:
            FileStorageError: the directory itself could not be enumerated
        """
        try:
            entries = await aiofiles.os.listdir(self.storage_dir)
        except OSError as e:
            logger.error("Failed to list storage directory %s: %s", self.storage_dir, str(e))
            raise FileStorageError(
                message="Could not list notes.",
                context={"path": str(self.storage_dir), "os_error": str(e)},
            )

        names = sorted(
            entry[: -len(NOTE_SUFFIX)] for entry in entries if entry.endswith(NOTE_SUFFIX)
        )
        items = await asyncio.gather(*(self._read_entry(name) for name in names))
        return [item for item in items if item is not None]

    async def _read_entry(self, name: str) -> Optional[NoteItem]:
        path = self.storage_dir / f"{name}{NOTE_SUFFIX}"
        # Only regular files are notes; a "foo.txt" directory is not
        if not await aiofiles.os.path.isfile(path):
            logger.debug("Skipping non-file entry %s", path.name)
            return None
        try:
            async with aiofiles.open(
                path, "r", encoding=ENCODING, errors="replace", newline=""
            ) as f:
                text = await f.read()
        except OSError as e:
            logger.warning("Skipping unreadable note %s: %s", path.name, str(e))
            return None
        return NoteItem(name=name, text=text)

    # ── Storage directory ─────────────────────────────────────────────────

    async def ensure_storage_dir(self) -> None:
        """Create the storage directory (and parents) if it does not exist yet."""
        try:
            await aiofiles.os.makedirs(self.storage_dir, exist_ok=True)
        except OSError as e:
            # Not fatal: requests will surface the problem as 500s
            logger.error("Could not create storage directory %s: %s", self.storage_dir, str(e))

    async def storage_status(self) -> str:
        """
        Report whether the storage directory is usable.

        Returns:
            "available"     directory exists and is readable and writable
            "read_only"     directory exists but cannot be written
            "missing"       path does not exist or is not a directory
        """
        if not await aiofiles.os.path.isdir(self.storage_dir):
            return "missing"
        writable = await aiofiles.os.access(self.storage_dir, os.R_OK | os.W_OK | os.X_OK)
        return "available" if writable else "read_only"
