"""
Notes API — Note Record Model
===============================

What:  Pydantic model for the single persisted record type, plus the
       timestamp helpers that keep its wire format stable.
Why:   One definition drives validation on load, serialization on save and
       the API response schema, so the three can never drift apart.
Who:   Created by NoteService, validated/serialized by NoteStorage,
       returned by the notes routes.

Persisted shape (field order is significant):
    {
      "id": "1705320000000",
      "note_title": "Task List",
      "note_body": "Complete project documentation",
      "created_at": "2024-01-15T12:00:00.000Z",
      "updated_at": "2024-01-15T12:00:00.000Z"
    }

Timestamps:
    Always UTC with millisecond precision and a trailing "Z". utc_now()
    truncates to milliseconds so an in-memory Note compares equal to the
    same Note after a save/load round-trip.
"""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, field_serializer, field_validator


def utc_now() -> datetime:
    """Current UTC time truncated to whole milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class Note(BaseModel):
    """
    A single note record.

    Lifecycle:
        1. Created only by NoteService.create_note()
        2. Mutated in place by NoteService.update_note() (id never changes)
        3. Removed only by NoteService.delete_note()

    Invariant: updated_at >= created_at.
    """

    id: str = Field(description="Unique note identifier (decimal milliseconds at creation)")
    note_title: str = Field(description="Note title")
    note_body: str = Field(description="Note body text")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last updated (UTC ISO 8601)")

    model_config = {"extra": "ignore"}

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        # Naive timestamps in a hand-edited file are taken as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


# The whole ordered set of notes; the unit of load and save
Collection = List[Note]
