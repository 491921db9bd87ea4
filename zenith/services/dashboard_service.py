"""Admin dashboard statistics, cached briefly in Redis."""

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.config import settings
from zenith.crud.order import order_crud
from zenith.crud.product import product_crud
from zenith.crud.support import support_crud
from zenith.crud.tutor import tutor_application_crud
from zenith.crud.user import user_crud
from zenith.models.user import User, UserRole
from zenith.schemas.admin import DashboardStats
from zenith.services.cache_service import cache, DASHBOARD_STATS_KEY


async def compute_dashboard_stats(db: AsyncSession) -> DashboardStats:
    by_status = await product_crud.count_by_status(db)
    return DashboardStats(
        total_users=await user_crud.count(db),
        total_admins=await user_crud.count_where(db, User.role == UserRole.ADMIN),
        active_users_7d=await user_crud.count_active_since(db, days=7),
        verified_users=await user_crud.count_where(db, User.admin_verified.is_(True)),
        total_products=sum(by_status.values()),
        products_by_status=by_status,
        total_orders=await order_crud.count(db),
        pending_tutor_applications=await tutor_application_crud.count_pending(db),
        pending_support_messages=await support_crud.count_pending(db),
    )


async def get_dashboard_stats(db: AsyncSession) -> DashboardStats:
    """Cached stats; recomputed on a miss or when Redis is down."""
    async def load() -> dict:
        stats = await compute_dashboard_stats(db)
        return stats.model_dump()

    data = await cache.get_or_set(DASHBOARD_STATS_KEY, load, ttl=settings.DASHBOARD_CACHE_TTL)
    return DashboardStats(**data)
