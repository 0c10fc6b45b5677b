"""
Notes API — Note Storage (Persistence Adapter)
================================================

What:  Reads and writes the entire note collection as one JSON document.
Why:   Every other component goes through this adapter; nothing else touches
       the notes file directly.
How:   Whole-file async I/O with aiofiles. load() parses and validates the
       full array; save() serializes the full array in memory, writes it to
       a sibling temp file and swaps that file into place with os.replace.
Who:   Used by NoteService for every operation; probed by the health route.
When:  Once (load) or twice (load + save) per request.

File Format:
    A JSON array of Note objects, indented with two spaces, fields in the
    order id, note_title, note_body, created_at, updated_at.

Failure Model:
    - Missing file:    created holding "[]", empty collection returned
    - Malformed file:  WARNING logged, failure recorded, empty collection
                       returned (availability over strictness; the next
                       successful save overwrites the bad content)
    - Write failure:   StorageError raised to the caller
    Readers only ever see a complete previous or complete new file: the
    notes file itself is never opened for writing. There is no fsync, so a
    power loss right after save() returns may still lose the last write.
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiofiles
import aiofiles.os
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from notes_api.exceptions import MalformedStoreError, StorageError
from notes_api.models.note import Collection, Note

logger = logging.getLogger(__name__)

# ── Fixed Location ────────────────────────────────────────────────────────
# Relative to the service's working directory; intentionally not a setting
NOTES_FILE = "notes.json"

_collection_adapter = TypeAdapter(List[Note])


class NoteStorage:
    """
    Whole-collection persistence for notes.

    Observability:
        malformed_loads:  How many loads fell back to an empty collection
        last_load_error:  Description of the most recent malformed load
        last_save_error:  Description of the most recent failed save
    These are reported by GET /health so a corrupted file is visible even
    though requests keep succeeding.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or NOTES_FILE)
        self.malformed_loads = 0
        self.last_load_error: Optional[str] = None
        self.last_save_error: Optional[str] = None

    # ── Encoding ──────────────────────────────────────────────────────────

    @staticmethod
    def encode(notes: Collection) -> bytes:
        """Serialize a collection to indented JSON bytes."""
        return _collection_adapter.dump_json(notes, indent=2)

    @staticmethod
    def decode(raw: Union[str, bytes]) -> Collection:
        """
        Parse and validate a serialized collection.

        Raises:
            MalformedStoreError if the content is not a JSON array of Notes.
        """
        try:
            return _collection_adapter.validate_json(raw)
        except PydanticValidationError as e:
            raise MalformedStoreError(
                context={"errors": e.error_count(), "detail": str(e).splitlines()[0]},
            )

    # ── Load ──────────────────────────────────────────────────────────────

    async def load(self) -> Collection:
        """
        Return the full current collection.

        Creates the file with an empty array if it does not exist yet.
        Never raises for missing or malformed content.
        """
        if not self.path.exists():
            await self._initialize()
            return []

        try:
            async with aiofiles.open(self.path, "rb") as f:
                raw = await f.read()
            notes = self.decode(raw)
        except MalformedStoreError as e:
            self.malformed_loads += 1
            self.last_load_error = str(e.context.get("detail", e.message))
            logger.warning(
                "Notes file %s is malformed, treating it as empty: %s",
                self.path,
                self.last_load_error,
            )
            return []
        except OSError as e:
            self.malformed_loads += 1
            self.last_load_error = str(e)
            logger.error("Failed to read notes file %s: %s", self.path, str(e))
            return []

        self.last_load_error = None
        logger.debug("Loaded %d notes from %s", len(notes), self.path)
        return notes

    async def _initialize(self) -> None:
        """Create the notes file holding an empty collection."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self.path, "wb") as f:
                await f.write(self.encode([]))
            logger.info("Initialized empty notes file at %s", self.path.resolve())
        except OSError as e:
            # Load still reports an empty collection; the next save will
            # surface the problem as a StorageError
            logger.error("Failed to create notes file %s: %s", self.path, str(e))

    # ── Save ──────────────────────────────────────────────────────────────

    async def save(self, notes: Collection) -> None:
        """
        Overwrite the notes file with the given collection.

        The payload is fully encoded and written to a temp file next to the
        notes file, then renamed over it. A concurrent load() sees either
        the old or the new collection, never a truncated file.

        Raises:
            StorageError if the file cannot be written.
        """
        payload = self.encode(notes)
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex[:8]}.tmp")

        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            self.last_save_error = str(e)
            logger.error("Failed to write notes file %s: %s", self.path, str(e))
            await self._discard(tmp_path)
            raise StorageError(
                context={"path": str(self.path), "os_error": str(e)},
            )

        self.last_save_error = None
        logger.debug("Saved %d notes to %s (%d bytes)", len(notes), self.path, len(payload))

    @staticmethod
    async def _discard(tmp_path: Path) -> None:
        """Remove a leftover temp file after a failed save."""
        try:
            if tmp_path.exists():
                await aiofiles.os.remove(tmp_path)
        except OSError as e:
            logger.warning("Failed to remove temp file %s: %s", tmp_path, str(e))

    # ── Health ────────────────────────────────────────────────────────────

    def probe(self) -> Dict[str, Any]:
        """
        Summarize storage state for the health check.

        Status values:
            ok:         No recorded problems
            degraded:   A load fell back to empty or the last save failed
            missing:    The file does not exist yet (created on first load)
        """
        if self.last_save_error or self.last_load_error:
            status = "degraded"
        elif not self.path.exists():
            status = "missing"
        else:
            status = "ok"
        return {
            "status": status,
            "path": str(self.path),
            "malformed_loads": self.malformed_loads,
            "last_load_error": self.last_load_error,
            "last_save_error": self.last_save_error,
        }
