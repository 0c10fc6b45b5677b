# Routes package init
"""
Notes API — API Routes Package
================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - docs.py:    GET    /                  (README as HTML or plain text)
    - notes.py:   GET    /notes             (list all notes)
                  GET    /notes/{id}        (get single note)
                  POST   /notes             (create note)
                  PATCH  /notes/{id}        (update note)
                  DELETE /notes/{id}        (delete note)
    - health.py:  GET    /health            (service health check)

Design Principle:
    Routes are THIN. Validation, identity and persistence all live in
    NoteService; routes only translate between HTTP and service calls.
"""
