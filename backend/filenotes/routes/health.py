"""
FileNotes: Health Check Route
================================

What:  Health check endpoint for monitoring and process supervisors.
How:   The service has one dependency, the store root. It is healthy while
       the root is still a directory.

Status levels:
    - healthy:   store root exists and is a directory (HTTP 200)
    - unhealthy: store root is gone or replaced by a file (HTTP 200, flagged)
"""

import logging
import time

import aiofiles.os
from fastapi import APIRouter, Depends

from filenotes import __version__
from filenotes.dependencies import get_note_store, get_started_at
from filenotes.schemas.note import HealthResponse
from filenotes.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: NoteStore = Depends(get_note_store),
    started_at: float = Depends(get_started_at),
) -> HealthResponse:
    status = "healthy"
    if not await aiofiles.os.path.isdir(store.root):
        status = "unhealthy"
        logger.warning("Health check: storage root %s is not a directory", store.root)

    return HealthResponse(
        status=status,
        version=__version__,
        storage_root=str(store.root),
        uptime_seconds=round(time.time() - started_at, 2),
    )
