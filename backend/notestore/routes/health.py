"""
NoteStore — Health Check Route
================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Checks the one dependency the service has, the storage directory.

Status levels:
    - healthy:   storage directory exists and is writable
    - degraded:  storage directory exists but is read-only (reads still work)
    - unhealthy: storage directory is missing or not a directory
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from notestore import __version__
from notestore.dependencies import get_note_store
from notestore.schemas.note import HealthResponse
from notestore.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_STATUS_BY_STORAGE = {
    "available": "healthy",
    "read_only": "degraded",
    "missing": "unhealthy",
}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    request: Request,
    store: NoteStore = Depends(get_note_store),
) -> HealthResponse:
    """
    Report service status and storage directory state.

    Always answers 200; the `status` field carries the verdict so that a
    check can tell "process up, storage broken" from "process down".
    """
    storage = await store.storage_status()
    overall = _STATUS_BY_STORAGE[storage]
    if overall != "healthy":
        logger.warning("Health check: storage directory %s is %s", store.storage_dir, storage)

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage,
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
