"""Health & readiness probes.

- GET /health always returns 200 while the process is up (liveness)
- GET /health/ready returns 503 if the database is unreachable (readiness)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from stockroom.infrastructure.api.dependencies import get_database
from stockroom.infrastructure.persistence.database import Database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", status_code=status.HTTP_200_OK)
def health_check():
    """Basic liveness probe."""
    return {"status": "healthy", "service": "stockroom"}


@router.get("/ready")
def readiness_check(database: Database = Depends(get_database)):
    """Readiness probe, including database connectivity."""
    if not database.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
