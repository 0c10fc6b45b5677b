"""
Notes API — Application Package Initializer
=============================================

What: Marks the `notes_api` directory as a Python package.
Why:  Enables module imports like `from notes_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is a thin layered stack over a single JSON file:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   NoteService (Lifecycle Manager)   │  ← Validation, identity, timestamps
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Pydantic records and API contracts
    ├─────────────────────────────────────┤
    │    NoteStorage (Persistence)        │  ← Whole-collection JSON load/save
    └─────────────────────────────────────┘

    Every request reloads the full collection from disk, so no layer keeps
    note state between requests.
"""

__version__ = "1.0.0"
