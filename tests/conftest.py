"""Pytest configuration and fixtures for Zenith API tests."""

from typing import AsyncGenerator, Callable, Dict
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from zenith.core.rate_limit import limiter
from zenith.core.security import create_access_token
from zenith.crud.user import user_crud
from zenith.db.base import Base
from zenith.db.session import get_db
# Import all models to ensure they are registered with Base.metadata
import zenith.models  # noqa: F401
from zenith.models.product import Product, ProductCondition, ProductStatus
from zenith.models.user import User, UserRole
from zenith.crud.product import category_crud
from zenith.schemas.user import UserCreate

# Test database URL - use SQLite for tests
# Using StaticPool ensures all connections share the same in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

limiter.enabled = False


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A session on a fresh in-memory database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        echo=False,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    from zenith.main import create_application
    from contextlib import asynccontextmanager

    # Create app without the lifespan that connects to production database
    @asynccontextmanager
    async def test_lifespan(app):
        yield

    test_app = create_application()
    test_app.router.lifespan_context = test_lifespan

    async def override_get_db():
        # Same commit/rollback contract as get_db, scoped to a SAVEPOINT so
        # a failed request undoes its own writes but keeps fixture data
        async with db_session.begin_nested():
            yield db_session

    test_app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    test_app.dependency_overrides.clear()


def auth_headers_for(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


async def _make_user(
    db: AsyncSession,
    email: str,
    first_name: str,
    role: UserRole = UserRole.STUDENT,
    permissions=None,
) -> User:
    return await user_crud.create(
        db,
        obj_in=UserCreate(
            email=email,
            password="password123",
            first_name=first_name,
            last_name="Tester",
            university="Zenith University",
        ),
        role=role,
        admin_permissions=permissions,
    )


@pytest_asyncio.fixture
async def student(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "thandi@example.com", "Thandi")


@pytest_asyncio.fixture
async def other_student(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "sipho@example.com", "Sipho")


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "admin@example.com", "Ada", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def limited_admin(db_session: AsyncSession) -> User:
    """An admin who may only read users."""
    return await _make_user(
        db_session, "reader@example.com", "Rea", role=UserRole.ADMIN, permissions=["users:read"]
    )


@pytest.fixture
def student_headers(student: User) -> Dict[str, str]:
    return auth_headers_for(student)


@pytest.fixture
def other_headers(other_student: User) -> Dict[str, str]:
    return auth_headers_for(other_student)


@pytest.fixture
def admin_headers(admin: User) -> Dict[str, str]:
    return auth_headers_for(admin)


@pytest.fixture
def limited_admin_headers(limited_admin: User) -> Dict[str, str]:
    return auth_headers_for(limited_admin)


@pytest.fixture
def mock_user_data():
    """Sample registration payload."""
    return {
        "email": "newstudent@example.com",
        "password": "testpassword123",
        "first_name": "Lerato",
        "last_name": "Mokoena",
        "university": "Zenith University",
    }


@pytest.fixture
def mock_product_data():
    """Sample listing payload."""
    return {
        "title": "Calculus: Early Transcendentals",
        "description": "8th edition, a few highlighted pages",
        "price": 450.0,
        "quantity": 1,
        "condition": "like-new",
        "category": "textbooks",
        "location": "Johannesburg",
        "university": "Zenith University",
        "images": ["https://cdn.example.com/calculus.jpg"],
    }


@pytest.fixture
def make_product(db_session: AsyncSession) -> Callable:
    """Factory inserting a listing directly, in any status."""

    async def _make(
        seller: User,
        title: str = "Used Laptop",
        price: float = 3500.0,
        status: ProductStatus = ProductStatus.ACTIVE,
        quantity: int = 1,
        category: str = "electronics",
        **extra,
    ) -> Product:
        cat = await category_crud.get_or_create(db_session, category)
        product = Product(
            title=title,
            description=extra.pop("description", f"{title} in good condition"),
            price=price,
            quantity=quantity,
            condition=extra.pop("condition", ProductCondition.GOOD),
            status=status,
            admin_approved=status in (ProductStatus.ACTIVE, ProductStatus.SOLD),
            seller_id=seller.id,
            category_id=cat.id,
            images=[],
            **extra,
        )
        db_session.add(product)
        await db_session.flush()
        await db_session.refresh(product)
        await db_session.refresh(product, attribute_names=["seller", "category"])
        return product

    return _make
