"""Health & Readiness Probes — process liveness and person-store readiness.

Invariants:
    - GET /api/health/ answers 200 while the process is up, without touching storage
    - GET /api/health/ready answers 200 only when the store answers `SELECT 1`;
      the body then carries the storage backend and the current person count
    - A store failure during the count is reported as not ready (503), never as 500
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from phonebook.core.errors import StorageError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "phonebook-api"


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"service": SERVICE_NAME, "status": "not_ready", "reason": reason},
    )


@router.get("/")
async def liveness(request: Request):
    return {
        "service": SERVICE_NAME,
        "status": "healthy",
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness(request: Request):
    store = getattr(request.app.state, "person_store", None)
    if store is None or not await store.health_check():
        return _not_ready("database_unavailable")
    try:
        persons = await store.count()
    except StorageError as e:
        logger.warning(f"Readiness count failed: {e.kind.value}")
        return _not_ready(f"storage_{e.kind.value}")
    return {
        "service": SERVICE_NAME,
        "status": "ready",
        "storage": getattr(store, "backend", "unknown"),
        "persons": persons,
    }
