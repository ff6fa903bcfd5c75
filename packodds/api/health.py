"""
Health check endpoints.

Liveness, plus a readiness probe covering the database and the booster feed.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from packodds.db.database import get_session
from packodds.models.failure import BoosterDataError
from packodds.services.booster_catalog import get_booster_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    booster_products: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness probe.

    Checks database connectivity and that the booster feed is loaded.
    Returns 503 if either is unavailable.
    """
    database = "connected"
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        database = "disconnected"

    products: int | None
    try:
        products = len(get_booster_catalog())
    except (FileNotFoundError, ValueError, BoosterDataError):
        products = None

    if database != "connected" or products is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database=database, booster_products=products)

    return HealthResponse(status="ready", database=database, booster_products=products)
