"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from models.bookmark import Bookmark


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    bookmark_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """Check application health and that the bookmarks table is reachable."""
    try:
        result = await db.execute(select(func.count()).select_from(Bookmark))
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        return HealthResponse(status="degraded", database="unhealthy")

    return HealthResponse(
        status="healthy",
        database="healthy",
        bookmark_count=result.scalar_one(),
    )
