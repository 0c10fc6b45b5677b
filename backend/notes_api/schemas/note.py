"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the HTTP contract around the Note record.
Why:   Input type checking, automatic serialization and OpenAPI docs.
How:   FastAPI validates request bodies against these models; the Note model
       itself (models/note.py) is the response schema for note endpoints.

Presence vs. type:
    Both request models declare their fields Optional so that a missing or
    empty field reaches NoteService, which answers with our 400
    validation_error. A field of the wrong JSON type (e.g. a number) is
    rejected by FastAPI with its default 422.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes. Both fields are required to be non-empty by the service."""

    note_title: Optional[str] = Field(default=None, description="Note title")
    note_body: Optional[str] = Field(default=None, description="Note body text")


class NoteUpdate(BaseModel):
    """
    Body of PATCH /notes/{id}.

    Omitted or null fields are left unchanged; at least one must be given.
    """

    note_title: Optional[str] = Field(default=None, description="New title")
    note_body: Optional[str] = Field(default=None, description="New body text")


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Note with ID '1705320000000' was not found",
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: Optional[str] = Field(default=None, description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class StorageHealth(BaseModel):
    status: str = Field(description="ok, missing, degraded")
    path: str = Field(description="Location of the notes file")
    malformed_loads: int = Field(description="Loads that fell back to an empty collection")
    last_load_error: Optional[str] = None
    last_save_error: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response showing service and storage status."""

    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    storage: StorageHealth = Field(description="Notes file status")
    uptime_seconds: float = Field(description="Seconds since service started")
