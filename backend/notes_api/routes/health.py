"""
Notes API — Health Check Route
================================

What:  Health check endpoint for monitoring and container probes.
How:   Reports the NoteStorage probe and whether the notes file location
       is writable.

Status levels:
    - healthy:   Notes file readable and writable, no recorded failures (HTTP 200)
    - degraded:  A load fell back to an empty collection or the last save
                 failed, but the location is writable (HTTP 200)
    - unhealthy: The notes file location cannot be written (HTTP 503)
"""

import logging
import os
import time

from fastapi import APIRouter, Depends, Response

from notes_api import __version__
from notes_api.schemas.note import HealthResponse, StorageHealth
from notes_api.services.note_service import NoteService, get_note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Notes file cannot be written", "model": HealthResponse}},
)
async def health_check(
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> HealthResponse:
    storage = service.storage
    probe = storage.probe()

    # Writable if the file exists and is writable, or if its directory
    # allows creating it
    target = storage.path if storage.path.exists() else storage.path.resolve().parent
    writable = os.access(target, os.W_OK)

    if not writable:
        overall = "unhealthy"
        logger.warning("Health check: notes file location not writable: %s", target)
    elif probe["status"] == "degraded":
        overall = "degraded"
    else:
        overall = "healthy"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=StorageHealth(**probe),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
