# Services package init
"""
Notes API — Services Layer
============================

Service Inventory:
    - NoteStorage:  Whole-collection JSON persistence (storage_service.py)
    - IdGenerator:  Monotonic millisecond note IDs (id_service.py)
    - NoteService:  Note lifecycle operations (note_service.py)
    - DocsService:  README creation and rendering (docs_service.py)

Services know nothing about HTTP; they raise exceptions from
notes_api.exceptions and let the global handlers pick status codes.
"""
