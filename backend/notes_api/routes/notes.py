"""
Notes API — Notes Route Handlers
==================================

What:  CRUD endpoints over the note collection.
Why:   The HTTP boundary for the NoteService operations.
How:   Extracts path parameters and bodies, delegates to NoteService,
       returns JSON. Errors raised by the service are turned into responses
       by the global exception handlers in main.py.

Endpoints:
    GET    /notes          → 200 list of notes (X-Total-Count header)
    GET    /notes/{id}     → 200 note | 404
    POST   /notes          → 201 note | 400 | 500
    PATCH  /notes/{id}     → 200 note | 404 | 400 | 500
    DELETE /notes/{id}     → 204      | 404 | 500
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from notes_api.models.note import Note
from notes_api.schemas.note import ErrorResponse, NoteCreate, NoteUpdate
from notes_api.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Invalid note structure", "model": ErrorResponse}}
SERVER_ERROR = {500: {"description": "Storage failure", "model": ErrorResponse}}


@router.get(
    "/notes",
    response_model=List[Note],
    summary="Get all notes",
    description="Returns every stored note in creation order.",
)
async def list_notes(
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> List[Note]:
    notes = await service.list_notes()
    response.headers["X-Total-Count"] = str(len(notes))
    return notes


@router.get(
    "/notes/{note_id}",
    response_model=Note,
    responses={**NOT_FOUND},
    summary="Get a note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Note:
    return await service.get_note(note_id)


@router.post(
    "/notes",
    response_model=Note,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a new note",
    description="Both note_title and note_body are required and must be non-empty.",
)
async def create_note(
    payload: Optional[NoteCreate] = None,
    service: NoteService = Depends(get_note_service),
) -> Note:
    payload = payload or NoteCreate()
    return await service.create_note(
        note_title=payload.note_title,
        note_body=payload.note_body,
    )


@router.patch(
    "/notes/{note_id}",
    response_model=Note,
    responses={**NOT_FOUND, **BAD_REQUEST, **SERVER_ERROR},
    summary="Update a note by ID",
    description=(
        "Replaces only the supplied fields. At least one of note_title or "
        "note_body must be present; empty strings are accepted."
    ),
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = None,
    service: NoteService = Depends(get_note_service),
) -> Note:
    payload = payload or NoteUpdate()
    return await service.update_note(
        note_id,
        note_title=payload.note_title,
        note_body=payload.note_body,
    )


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a note by ID",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
