"""Health check endpoint."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select

from zenith.db.session import get_db
from zenith.core.config import settings
from zenith.core.logging import get_logger
from zenith.models.product import Category
from zenith.services.cache_service import cache

logger = get_logger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check(response: Response, db: AsyncSession = Depends(get_db)):
    """
    Report whether the marketplace can serve traffic.

    The database is required; Redis is optional and only reported. An empty
    category table means startup seeding has not run yet.
    """
    components = {"cache": "connected" if cache.available else "disabled"}
    try:
        categories = await db.scalar(select(func.count()).select_from(Category))
        components["database"] = "healthy"
        components["catalogue"] = "seeded" if categories else "empty"
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        components["database"] = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "healthy" if components["database"] == "healthy" else "degraded",
        "version": settings.VERSION,
        "service": settings.PROJECT_NAME,
        **components,
    }


@router.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "message": "Zenith API - student marketplace",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_STR}/docs",
        "resources": ["products", "tutors", "messages", "orders", "wishlist", "support"],
    }
