"""
Notes API — Custom Exception Hierarchy
========================================

What:  Defines application-specific exceptions for the note lifecycle.
Why:   Custom exceptions let the service layer signal failures without knowing
       about HTTP. Global handlers (registered in main.py) map each type to a
       status code and a structured JSON body.
How:   Each exception carries a message and an optional context dict.
Who:   Raised by NoteService and NoteStorage; caught by global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError       → 400 Bad Request (client can fix)
    ├── NotFoundError         → 404 Not Found
    ├── StorageError          → 500 Internal Server Error
    └── MalformedStoreError   → never leaves NoteStorage.load()

Propagation:
    ValidationError and NotFoundError are raised before anything is mutated.
    StorageError is raised after the in-memory mutation but before the caller
    is told of success; the mutation is discarded, never retried.
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only as "details" for 4xx)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when caller-supplied note data fails a presence check.

    When:    Create without a non-empty note_title/note_body, or update
             with neither field supplied.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NotesAPIError):
    """
    Raised when a referenced note ID has no matching record.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StorageError(NotesAPIError):
    """
    Raised when writing the notes file fails.

    What:    The save step failed after validation passed.
    When:    Disk full, permission denied, directory removed, I/O error.
    HTTP:    500 Internal Server Error

    The OS error is logged with the file path; the client only sees the
    generic message.
    """

    def __init__(
        self,
        message: str = "Failed to write notes to storage",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedStoreError(NotesAPIError):
    """
    Raised internally when the notes file exists but cannot be parsed.

    NoteStorage.load() catches this, logs a warning, records the failure and
    reports an empty collection so the service stays available.
    """

    def __init__(
        self,
        message: str = "Notes file content is malformed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
