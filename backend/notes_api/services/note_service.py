"""
Notes API — Note Service (Lifecycle Manager)
==============================================

What:  The five note operations: list, get, create, update, delete.
Why:   Encapsulates every rule about notes in one place, independent of HTTP.
How:   Each operation loads the full collection from NoteStorage, validates
       and mutates it in memory, and (for mutations) saves it back.
Who:   Called by the notes route handlers.

Operation Flow (mutations):
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │  Load    │───▶│  Validate /  │───▶│  Mutate in   │───▶│  Save    │
    │  (file)  │    │  Find by ID  │    │  memory      │    │  (file)  │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────┘

    ValidationError / NotFoundError are raised before any mutation.
    StorageError is raised by the save step; the caller never sees success.

Validation Rules:
    create: note_title and note_body must both be non-empty
    update: at least one of note_title / note_body must be supplied;
            an explicit empty string is accepted as a value

Concurrency:
    Mutations on one NoteService instance are serialized with an
    asyncio.Lock, so within a process two load-mutate-save cycles cannot
    interleave and lose an update. Separate processes sharing the same
    notes file are NOT coordinated: the last save wins.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from notes_api.exceptions import NotFoundError, ValidationError
from notes_api.models.note import Note, utc_now
from notes_api.services.id_service import IdGenerator, id_generator
from notes_api.services.storage_service import NoteStorage

logger = logging.getLogger(__name__)

CREATE_STRUCTURE_MESSAGE = (
    "Invalid structure. Expected: { note_title: string, note_body: string }"
)
UPDATE_STRUCTURE_MESSAGE = (
    "Invalid structure. Expected at least one of: { note_title: string, note_body: string }"
)


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        storage: Persistence adapter (defaults to the fixed notes file)
        ids:     ID generator (defaults to the process-wide generator)
        clock:   Returns the current UTC time (injectable for tests)
    """

    def __init__(
        self,
        storage: Optional[NoteStorage] = None,
        ids: Optional[IdGenerator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.storage = storage or NoteStorage()
        self.ids = ids or id_generator
        self.clock = clock or utc_now
        self._write_lock = asyncio.Lock()

    @staticmethod
    def _find(notes: List[Note], note_id: str) -> Tuple[int, Note]:
        """Linear scan for the first note whose id equals note_id exactly."""
        for index, note in enumerate(notes):
            if note.id == note_id:
                return index, note
        raise NotFoundError(resource="Note", resource_id=note_id)

    # ── Queries ───────────────────────────────────────────────────────────

    async def list_notes(self) -> List[Note]:
        """Return the full collection in creation order."""
        return await self.storage.load()

    async def get_note(self, note_id: str) -> Note:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: no note has exactly this ID
        """
        notes = await self.storage.load()
        _, note = self._find(notes, note_id)
        return note

    # ── Mutations ─────────────────────────────────────────────────────────

    async def create_note(
        self,
        note_title: Optional[str],
        note_body: Optional[str],
    ) -> Note:
        """
        Create a note and append it to the collection.

        Raises:
            ValidationError: note_title or note_body missing or empty
            StorageError:    the collection could not be written
        """
        if not note_title or not note_body:
            missing = [
                name for name, value in (("note_title", note_title), ("note_body", note_body))
                if not value
            ]
            raise ValidationError(
                message=CREATE_STRUCTURE_MESSAGE,
                context={"missing": missing},
            )

        async with self._write_lock:
            notes = await self.storage.load()
            now = self.clock()
            note = Note(
                id=self.ids.next_id(n.id for n in notes),
                note_title=note_title,
                note_body=note_body,
                created_at=now,
                updated_at=now,
            )
            notes.append(note)
            await self.storage.save(notes)

        logger.info("Created note %s (%d notes total)", note.id, len(notes))
        return note

    async def update_note(
        self,
        note_id: str,
        note_title: Optional[str] = None,
        note_body: Optional[str] = None,
    ) -> Note:
        """
        Replace the supplied fields of an existing note.

        None means "not supplied"; unsupplied fields are left unchanged.
        updated_at never moves backwards, even if the clock does.

        Raises:
            NotFoundError:   no note has this ID
            ValidationError: neither field supplied
            StorageError:    the collection could not be written
        """
        async with self._write_lock:
            notes = await self.storage.load()
            _, note = self._find(notes, note_id)

            if note_title is None and note_body is None:
                raise ValidationError(
                    message=UPDATE_STRUCTURE_MESSAGE,
                    context={"note_id": note_id},
                )

            if note_title is not None:
                note.note_title = note_title
            if note_body is not None:
                note.note_body = note_body
            note.updated_at = max(self.clock(), note.updated_at, note.created_at)

            await self.storage.save(notes)

        logger.info("Updated note %s", note_id)
        return note

    async def delete_note(self, note_id: str) -> None:
        """
        Remove a note, keeping the order of the remaining notes.

        Raises:
            NotFoundError: no note has this ID
            StorageError:  the collection could not be written
        """
        async with self._write_lock:
            notes = await self.storage.load()
            index, _ = self._find(notes, note_id)
            del notes[index]
            await self.storage.save(notes)

        logger.info("Deleted note %s (%d notes remaining)", note_id, len(notes))


# ── Singleton Instance ────────────────────────────────────────────────────
# One instance per process so its write lock covers every request
note_service = NoteService()


def get_note_service() -> NoteService:
    """FastAPI dependency returning the process-wide NoteService."""
    return note_service
