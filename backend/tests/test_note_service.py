"""
Notes API — Note Service Unit Tests
=====================================

What:  Tests for NoteService lifecycle operations (list, get, create, update, delete).
How:   Uses a real NoteStorage on a temporary file; the clock is injected
       where a test needs controlled timestamps.

What we test:
    ✅ Create then get returns the same title/body with created_at == updated_at
    ✅ Create rejects missing/empty fields without touching the collection
    ✅ Update replaces only supplied fields and refreshes updated_at
    ✅ Update with no fields is rejected; unknown IDs are NotFound
    ✅ Delete removes exactly one note and preserves order
    ✅ Save failures surface as StorageError and are not committed
    ✅ Concurrent creates in one process do not lose updates
    ✅ Reads running alongside writes always see a complete collection
"""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest

from notes_api.exceptions import NotFoundError, StorageError, ValidationError
from notes_api.services.id_service import IdGenerator
from notes_api.services.note_service import NoteService


class FakeClock:
    """Returns a fixed time that tests can move forwards or backwards."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def timed_service(storage, clock):
    return NoteService(storage=storage, ids=IdGenerator(), clock=clock)


class TestNoteServiceList:
    """Tests for list_notes."""

    @pytest.mark.asyncio
    async def test_list_empty_store(self, service):
        """A fresh store lists as an empty sequence."""
        assert await service.list_notes() == []

    @pytest.mark.asyncio
    async def test_list_preserves_creation_order(self, service):
        first = await service.create_note("A", "1")
        second = await service.create_note("B", "2")
        third = await service.create_note("C", "3")

        notes = await service.list_notes()

        assert [n.id for n in notes] == [first.id, second.id, third.id]

    @pytest.mark.asyncio
    async def test_list_create_delete_scenario(self, service):
        """Empty → create one → one listed → delete it → empty again."""
        assert await service.list_notes() == []

        note = await service.create_note("A", "B")
        notes = await service.list_notes()
        assert len(notes) == 1
        assert notes[0].note_title == "A"

        await service.delete_note(note.id)
        assert await service.list_notes() == []


class TestNoteServiceGet:
    """Tests for get_note."""

    @pytest.mark.asyncio
    async def test_get_nonexistent_on_empty_store(self, service):
        with pytest.raises(NotFoundError):
            await service.get_note("nonexistent")

    @pytest.mark.asyncio
    async def test_get_nonexistent_with_notes(self, service):
        await service.create_note("A", "B")

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_note("nonexistent")

        assert exc_info.value.context["resource_id"] == "nonexistent"

    @pytest.mark.asyncio
    async def test_get_matches_exact_id_only(self, service, storage, sample_notes):
        """No prefix or partial matching on IDs."""
        await storage.save(sample_notes)

        with pytest.raises(NotFoundError):
            await service.get_note("170532000000")
        assert (await service.get_note("1705320000001")).note_title == "Groceries"


class TestNoteServiceCreate:
    """Tests for create_note."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, service):
        """Create then get returns exactly the given fields."""
        created = await service.create_note("Task List", "Complete project documentation")

        fetched = await service.get_note(created.id)

        assert fetched.note_title == "Task List"
        assert fetched.note_body == "Complete project documentation"
        assert fetched.created_at == fetched.updated_at
        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_persists_to_file(self, service, notes_path):
        note = await service.create_note("A", "B")

        assert note.id in notes_path.read_text()

    @pytest.mark.asyncio
    async def test_create_assigns_decimal_time_id(self, timed_service, clock):
        note = await timed_service.create_note("A", "B")

        assert note.id.isdigit()
        assert note.created_at == clock.now

    @pytest.mark.asyncio
    async def test_rapid_creates_get_distinct_ids(self, timed_service):
        """Same clock reading must still yield distinct IDs."""
        notes = [await timed_service.create_note(f"T{i}", "B") for i in range(5)]

        ids = [n.id for n in notes]
        assert len(set(ids)) == 5
        assert ids == sorted(ids, key=int)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,body",
        [("", "body"), ("title", ""), (None, "body"), ("title", None), ("", "")],
    )
    async def test_create_rejects_missing_fields(self, service, title, body):
        """Empty or absent fields are InvalidInput and nothing is stored."""
        await service.create_note("existing", "note")

        with pytest.raises(ValidationError, match="Invalid structure") as exc_info:
            await service.create_note(title, body)

        assert exc_info.value.context["missing"]

        assert len(await service.list_notes()) == 1

    @pytest.mark.asyncio
    async def test_create_validation_does_not_touch_storage(self, service):
        with patch.object(service.storage, "load", new=AsyncMock()) as mock_load:
            with pytest.raises(ValidationError):
                await service.create_note("", "")

        mock_load.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_storage_failure_not_committed(self, service):
        """A failed save raises StorageError and the note never appears."""
        await service.create_note("kept", "note")

        with patch.object(
            service.storage, "save", new=AsyncMock(side_effect=StorageError())
        ):
            with pytest.raises(StorageError):
                await service.create_note("lost", "note")

        notes = await service.list_notes()
        assert [n.note_title for n in notes] == ["kept"]

    @pytest.mark.asyncio
    async def test_create_on_malformed_store_starts_fresh(self, service, notes_path):
        """The malformed-store fallback means the next save replaces the bad file."""
        notes_path.write_text("not json")

        note = await service.create_note("A", "B")

        assert [n.id for n in await service.list_notes()] == [note.id]


class TestNoteServiceUpdate:
    """Tests for update_note."""

    @pytest.mark.asyncio
    async def test_update_title_only(self, timed_service, clock):
        """Updating the title leaves the body and created_at unchanged."""
        note = await timed_service.create_note("Old", "Body")
        clock.advance(seconds=5)

        updated = await timed_service.update_note(note.id, note_title="New")

        assert updated.note_title == "New"
        assert updated.note_body == "Body"
        assert updated.created_at == note.created_at
        assert updated.updated_at > note.updated_at
        assert updated.id == note.id

    @pytest.mark.asyncio
    async def test_update_body_only(self, timed_service, clock):
        note = await timed_service.create_note("Title", "Old")
        clock.advance(milliseconds=1)

        updated = await timed_service.update_note(note.id, note_body="New")

        assert updated.note_title == "Title"
        assert updated.note_body == "New"

    @pytest.mark.asyncio
    async def test_update_is_persisted(self, service):
        note = await service.create_note("Old", "Body")

        await service.update_note(note.id, note_title="New", note_body="Text")

        fetched = await service.get_note(note.id)
        assert (fetched.note_title, fetched.note_body) == ("New", "Text")

    @pytest.mark.asyncio
    async def test_update_accepts_empty_string(self, service):
        """Update only requires a field to be supplied, not non-empty."""
        note = await service.create_note("Title", "Body")

        updated = await service.update_note(note.id, note_title="")

        assert updated.note_title == ""
        assert (await service.get_note(note.id)).note_title == ""

    @pytest.mark.asyncio
    async def test_update_without_fields_rejected(self, service):
        note = await service.create_note("Title", "Body")

        with pytest.raises(ValidationError, match="at least one"):
            await service.update_note(note.id)

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_not_found(self, service):
        """Unknown IDs are reported before the field check."""
        with pytest.raises(NotFoundError):
            await service.update_note("nonexistent")

    @pytest.mark.asyncio
    async def test_updated_at_never_moves_backwards(self, timed_service, clock):
        """If the clock steps back, updated_at keeps its previous value."""
        note = await timed_service.create_note("Title", "Body")
        clock.advance(seconds=-30)

        updated = await timed_service.update_note(note.id, note_body="x")

        assert updated.updated_at == note.updated_at
        assert updated.updated_at >= updated.created_at

    @pytest.mark.asyncio
    async def test_update_storage_failure_not_committed(self, service):
        note = await service.create_note("Title", "Body")

        with patch.object(
            service.storage, "save", new=AsyncMock(side_effect=StorageError())
        ):
            with pytest.raises(StorageError):
                await service.update_note(note.id, note_title="Changed")

        assert (await service.get_note(note.id)).note_title == "Title"


class TestNoteServiceDelete:
    """Tests for delete_note."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, service):
        note = await service.create_note("A", "B")

        await service.delete_note(note.id)

        with pytest.raises(NotFoundError):
            await service.get_note(note.id)

    @pytest.mark.asyncio
    async def test_delete_preserves_order(self, service):
        first = await service.create_note("1", "x")
        second = await service.create_note("2", "x")
        third = await service.create_note("3", "x")

        assert await service.delete_note(second.id) is None

        assert [n.id for n in await service.list_notes()] == [first.id, third.id]

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, service):
        with pytest.raises(NotFoundError):
            await service.delete_note("nonexistent")

    @pytest.mark.asyncio
    async def test_delete_twice(self, service):
        note = await service.create_note("A", "B")
        await service.delete_note(note.id)

        with pytest.raises(NotFoundError):
            await service.delete_note(note.id)

    @pytest.mark.asyncio
    async def test_deleted_id_is_not_reused(self, timed_service):
        """A new note never receives the ID of a deleted one."""
        note = await timed_service.create_note("A", "B")
        await timed_service.delete_note(note.id)

        replacement = await timed_service.create_note("C", "D")

        assert replacement.id != note.id

    @pytest.mark.asyncio
    async def test_delete_storage_failure_not_committed(self, service):
        note = await service.create_note("A", "B")

        with patch.object(
            service.storage, "save", new=AsyncMock(side_effect=StorageError())
        ):
            with pytest.raises(StorageError):
                await service.delete_note(note.id)

        assert (await service.get_note(note.id)).id == note.id


class TestNoteServiceConcurrency:
    """Mutations on one service instance are serialized."""

    @pytest.mark.asyncio
    async def test_concurrent_creates_are_all_kept(self, service):
        await asyncio.gather(*(service.create_note(f"T{i}", "B") for i in range(10)))

        notes = await service.list_notes()

        assert len(notes) == 10
        assert len({n.id for n in notes}) == 10

    @pytest.mark.asyncio
    async def test_concurrent_update_and_create(self, service):
        note = await service.create_note("A", "B")

        await asyncio.gather(
            service.update_note(note.id, note_title="Changed"),
            service.create_note("C", "D"),
        )

        notes = await service.list_notes()
        assert len(notes) == 2
        assert notes[0].note_title == "Changed"

    @pytest.mark.asyncio
    async def test_reads_during_writes_see_committed_notes(self, service, storage, sample_notes):
        """Readers running alongside saves never observe a partially written file."""
        seeded = [
            sample_notes[0].model_copy(update={"id": str(1705320000000 + i)})
            for i in range(200)
        ]
        await storage.save(seeded)
        seen = []

        async def reader():
            for _ in range(200):
                seen.append(len(await service.list_notes()))
                await asyncio.sleep(0)

        async def writer():
            for i in range(30):
                await service.create_note(f"T{i}", "B")

        await asyncio.gather(reader(), writer())

        assert min(seen) >= 200
        assert storage.malformed_loads == 0
        assert len(await service.list_notes()) == 230

    @pytest.mark.asyncio
    async def test_get_during_writes_finds_existing_note(self, service):
        note = await service.create_note("Kept", "Body")

        async def reader():
            for _ in range(100):
                assert (await service.get_note(note.id)).note_title == "Kept"
                await asyncio.sleep(0)

        async def writer():
            for i in range(20):
                await service.create_note(f"T{i}", "B")

        await asyncio.gather(reader(), writer())
