"""
FileNotes: Note Store
========================

What:  CRUD and listing of notes, one plain-text file per note in a flat directory.
Why:   The filesystem is the database. This module is the only code that
       touches the store root, and it turns filesystem outcomes into the
       exceptions the HTTP layer maps to status codes.
How:   Async file I/O through aiofiles; every conditional operation lets the
       filesystem call itself report the condition instead of checking first.
Who:   Built once by create_app() from Settings; used by the note routes.

Atomicity:
    Writes go to .staging/<uuid>.tmp first, so a reader never sees a note
    holding only part of its text.

    create  stage, then os.link() to the target   FileExistsError   → NoteConflictError
    read    open(path, "r")                       FileNotFoundError → NoteNotFoundError
    delete  os.remove(path)                       FileNotFoundError → NoteNotFoundError
    update  stage, then os.replace() over the target

    update is the one operation that still checks before acting: os.replace
    would happily create a missing target. A delete landing between the check
    and the replace can be undone by the update; the note text itself is
    never partially written.

Directory Structure:
    storage/
    ├── .staging/          in-flight writes (never listed, never a note)
    ├── groceries          note "groceries"
    └── todo               note "todo"
"""

import logging
import uuid
from pathlib import Path
from typing import List, Union

import aiofiles
import aiofiles.os

from filenotes.exceptions import (
    FileStorageError,
    NoteConflictError,
    NoteNotFoundError,
)
from filenotes.schemas.note import NoteItem, NoteWriteResult
from filenotes.services.path_resolver import resolve_note_path

logger = logging.getLogger(__name__)

STAGING_DIR_NAME = ".staging"

# Text is stored verbatim: UTF-8, no newline translation in either direction
_TEXT_OPTS = {"encoding": "utf-8", "newline": ""}


class NoteStore:
    """
    Flat-directory note storage rooted at a single directory.

    Every direct child regular file of the root is a note: the filename is
    the note name and the full file contents are the note text.
    Subdirectories (including the staging directory) are ignored.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self.staging_dir = self.root / STAGING_DIR_NAME

    def resolve(self, name: str) -> Path:
        """Sanitized path of note `name` inside this store's root."""
        return resolve_note_path(name, self.root)

    async def ensure_root(self) -> None:
        """
        Create the store root (with parents) and the staging directory.

        When:    Once, in the app lifespan, before any request is served.
        Raises:  FileStorageError if either directory cannot be created.
        """
        try:
            await aiofiles.os.makedirs(self.root, exist_ok=True)
            await aiofiles.os.makedirs(self.staging_dir, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create storage root %s: %s", self.root, e)
            raise FileStorageError(
                message="Note storage is unavailable",
                context={"path": str(self.root), "os_error": str(e)},
            )
        logger.info("Note storage ready at %s", self.root)

    async def exists(self, path: Path) -> bool:
        """True if `path` is a regular file. I/O errors count as "does not exist"."""
        try:
            return await aiofiles.os.path.isfile(path)
        except (OSError, ValueError):
            return False

    async def read(self, path: Path) -> str:
        """
        Return the full text of the note at `path`.

        Raises:
            NoteNotFoundError: no file at `path` (or it is a directory)
            FileStorageError:  the file exists but cannot be read as UTF-8 text
        """
        try:
            async with aiofiles.open(path, "r", **_TEXT_OPTS) as f:
                return await f.read()
        except (FileNotFoundError, IsADirectoryError):
            raise NoteNotFoundError(path.name)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read note %s: %s", path.name, e)
            raise FileStorageError(
                message="Failed to read note",
                context={"path": str(path), "error": str(e)},
            )

    async def create(self, path: Path, text: str) -> NoteWriteResult:
        """
        Create a new note; never overwrites.

        The text is staged first and hard-linked into place, so the note
        appears with its full text or not at all. link() refuses an existing
        target, which makes it the exclusive-create step.

        Raises:
            NoteConflictError: something named `path.name` already exists
            FileStorageError:  the file could not be written
        """
        staged = await self._stage(path, text)
        try:
            await aiofiles.os.link(staged, path)
        except FileExistsError:
            raise NoteConflictError(path.name)
        except OSError as e:
            logger.error("Failed to create note %s: %s", path.name, e)
            raise FileStorageError(
                message="Failed to save note",
                context={"path": str(path), "os_error": str(e)},
            )
        finally:
            await self._discard(staged)

        logger.info("Note created: %s (%d chars)", path.name, len(text))
        return NoteWriteResult(status="created", message="Created")

    async def update(self, path: Path, text: str) -> NoteWriteResult:
        """
        Replace the text of an existing note.

        The new text is written to the staging directory first and renamed
        over the target, so readers see either the old or the new text.

        Raises:
            NoteNotFoundError: no note at `path`; nothing is created
            FileStorageError:  staging or renaming failed
        """
        if not await self.exists(path):
            raise NoteNotFoundError(path.name)

        staged = await self._stage(path, text)
        try:
            # Checked again: a delete may have landed while the text was staged
            if not await self.exists(path):
                raise NoteNotFoundError(path.name)
            await aiofiles.os.replace(staged, path)
        except OSError as e:
            logger.error("Failed to update note %s: %s", path.name, e)
            raise FileStorageError(
                message="Failed to save note",
                context={"path": str(path), "os_error": str(e)},
            )
        finally:
            await self._discard(staged)

        logger.info("Note updated: %s (%d chars)", path.name, len(text))
        return NoteWriteResult(status="updated", message="Note updated")

    async def delete(self, path: Path) -> NoteWriteResult:
        """
        Remove the note at `path`.

        Raises:
            NoteNotFoundError: no note at `path`
            FileStorageError:  the file exists but could not be removed
        """
        try:
            await aiofiles.os.remove(path)
        except (FileNotFoundError, IsADirectoryError):
            raise NoteNotFoundError(path.name)
        except OSError as e:
            logger.error("Failed to delete note %s: %s", path.name, e)
            raise FileStorageError(
                message="Failed to delete note",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Note deleted: %s", path.name)
        return NoteWriteResult(status="deleted", message="Deleted")

    async def list_all(self) -> List[NoteItem]:
        """
        Every note in the root, in directory enumeration order.

        Failure policy:
            The listing is all-or-nothing. If the root cannot be enumerated or
            any note cannot be read, FileStorageError is raised and nothing is
            returned. A note deleted between enumeration and reading is simply
            left out, since it no longer exists.
        """
        try:
            with await aiofiles.os.scandir(self.root) as entries:
                names = [entry.name for entry in entries if entry.is_file()]
        except OSError as e:
            logger.error("Failed to enumerate storage root %s: %s", self.root, e)
            raise FileStorageError(
                message="Failed to list notes",
                context={"path": str(self.root), "os_error": str(e)},
            )

        notes: List[NoteItem] = []
        for name in names:
            try:
                text = await self.read(self.root / name)
            except NoteNotFoundError:
                logger.debug("Note vanished during listing: %s", name)
                continue
            notes.append(NoteItem(name=name, text=text))
        return notes

    async def _discard(self, path: Path) -> None:
        """Best-effort removal of a leftover file; a missing file is fine."""
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to clean up %s: %s", path, e)

    async def _stage(self, path: Path, text: str) -> Path:
        """
        Write `text` to a fresh file in the staging directory.

        A staging directory removed at runtime is recreated once.
        Raises FileStorageError if the text cannot be written.
        """
        staged = self.staging_dir / f"{uuid.uuid4().hex}.tmp"
        try:
            try:
                await self._write_file(staged, text)
            except FileNotFoundError:
                logger.warning("Staging directory %s missing; recreating", self.staging_dir)
                await aiofiles.os.makedirs(self.staging_dir, exist_ok=True)
                await self._write_file(staged, text)
        except OSError as e:
            logger.error("Failed to stage note %s: %s", path.name, e)
            await self._discard(staged)
            raise FileStorageError(
                message="Failed to save note",
                context={"path": str(path), "os_error": str(e)},
            )
        return staged

    @staticmethod
    async def _write_file(path: Path, text: str) -> None:
        async with aiofiles.open(path, "w", **_TEXT_OPTS) as f:
            await f.write(text)
