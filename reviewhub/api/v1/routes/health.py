"""
Health check endpoints

- /health (liveness): process is up, no dependencies checked
- /health/ready (readiness): database answers a trivial query
- /health/time: server clock, for client drift checks

Reference: https://kubernetes.io/docs/tasks/configure-pod-container/configure-liveness-readiness-startup-probes/
"""
import logging
import time

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewhub.core.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


class HealthResponse(BaseModel):
    """Status of the service"""
    status: str
    message: str


class TimeResponse(BaseModel):
    """Server clock in milliseconds since the Unix epoch"""
    timestamp: int


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check (liveness)",
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", message="Service is running")


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check",
    description="Checks that the review database is reachable.",
    status_code=status.HTTP_200_OK,
    responses={
        503: {"description": "Database unavailable"}
    }
)
async def readiness_check(db: AsyncSession = Depends(get_db)) -> HealthResponse:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is not ready - database unavailable"
        ) from e
    return HealthResponse(status="ready", message="Database reachable")


@router.get(
    "/time",
    response_model=TimeResponse,
    summary="Server time",
    status_code=status.HTTP_200_OK,
)
async def server_time() -> TimeResponse:
    return TimeResponse(timestamp=int(time.time() * 1000))
