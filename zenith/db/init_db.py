"""Database initialization utilities."""

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.config import settings
from zenith.core.logging import get_logger
from zenith.db.base import Base
from zenith.db.session import engine

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables."""
    import zenith.models  # noqa: F401  registers every table on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")



async def seed_categories(db: AsyncSession) -> int:
    """Create the default categories that do not exist yet."""
    from zenith.crud.product import category_crud

    created = 0
    for slug in settings.DEFAULT_CATEGORIES:
        if await category_crud.get_by_slug(db, slug) is None:
            await category_crud.get_or_create(db, slug)
            created += 1
    return created


async def seed_bootstrap_admin(db: AsyncSession) -> bool:
    """Create the first admin from settings, if configured and missing."""
    from zenith.crud.user import user_crud
    from zenith.models.user import UserRole
    from zenith.schemas.user import UserCreate

    email = settings.BOOTSTRAP_ADMIN_EMAIL.strip()
    if not email or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return False
    if await user_crud.get_by_email(db, email):
        return False

    await user_crud.create(
        db,
        obj_in=UserCreate(email=email, password=settings.BOOTSTRAP_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        email_verified=True,
    )
    logger.info(f"Bootstrap admin {email} created")
    return True


async def init_db(db: AsyncSession) -> None:
    """Initialize database with seed data if needed."""
    created = await seed_categories(db)
    if created:
        logger.info(f"Seeded {created} categories")
    await seed_bootstrap_admin(db)
    logger.info("Database initialization complete")
