"""CRUD operations for User model."""

from datetime import datetime, timezone, timedelta
from typing import List, Optional, Tuple
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.user import User, UserRole, AdminPermission
from zenith.schemas.user import UserCreate, ProfileUpdate
from zenith.core.security import get_password_hash, verify_password


class CRUDUser(CRUDBase[User, UserCreate, ProfileUpdate]):
    """CRUD operations for User model."""

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str
    ) -> Optional[User]:
        """Get user by email address (case-insensitive)."""
        result = await db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: UserCreate,
        role: UserRole = UserRole.STUDENT,
        admin_permissions: Optional[List[str]] = None,
        email_verified: bool = False
    ) -> User:
        """Create a new user with hashed password."""
        if role == UserRole.ADMIN and admin_permissions is None:
            admin_permissions = [AdminPermission.ALL.value]

        db_obj = User(
            email=obj_in.email.lower(),
            hashed_password=get_password_hash(obj_in.password),
            first_name=obj_in.first_name,
            last_name=obj_in.last_name,
            university=obj_in.university,
            phone=obj_in.phone,
            role=role,
            admin_permissions=admin_permissions or [],
            email_verified=email_verified,
        )
        return await self.save(db, db_obj)

    async def authenticate(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str
    ) -> Optional[User]:
        """Authenticate a user by email and password."""
        user = await self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def update_last_login(
        self,
        db: AsyncSession,
        user: User
    ) -> User:
        """Update user's last login timestamp."""
        user.last_login_at = datetime.now(timezone.utc)
        return await self.save(db, user)

    async def search(
        self,
        db: AsyncSession,
        *,
        query: Optional[str] = None,
        verified: Optional[bool] = None,
        role: Optional[UserRole] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[User], int]:
        """Filter users for the admin console. Returns (page, total)."""
        stmt = select(User)

        if query:
            term = f"%{query.strip()}%"
            stmt = stmt.where(
                or_(
                    User.email.ilike(term),
                    User.first_name.ilike(term),
                    User.last_name.ilike(term),
                    User.university.ilike(term),
                )
            )
        if verified is not None:
            stmt = stmt.where(User.admin_verified == verified)
        if role is not None:
            stmt = stmt.where(User.role == role)

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()

        result = await db.execute(
            stmt.order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all()), total

    async def count_active_admins(self, db: AsyncSession) -> int:
        """Count admins that can currently sign in."""
        result = await db.execute(
            select(func.count(User.id)).where(
                User.role == UserRole.ADMIN,
                User.is_active.is_(True)
            )
        )
        return result.scalar_one()

    async def get_active_admins(self, db: AsyncSession) -> List[User]:
        """All active admin accounts."""
        result = await db.execute(
            select(User).where(
                User.role == UserRole.ADMIN,
                User.is_active.is_(True)
            )
        )
        return list(result.scalars().all())

    async def get_pending_verifications(self, db: AsyncSession) -> List[User]:
        """Users who uploaded documents and are waiting for review."""
        result = await db.execute(
            select(User)
            .where(
                User.documents_uploaded.is_(True),
                User.admin_verified.is_(False)
            )
            .order_by(func.coalesce(User.updated_at, User.created_at).desc(), User.id.desc())
        )
        return list(result.scalars().all())

    async def count_active_since(self, db: AsyncSession, days: int = 7) -> int:
        """Users who signed in within the last ``days`` days."""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        result = await db.execute(
            select(func.count(User.id)).where(User.last_login_at >= since)
        )
        return result.scalar_one()

    async def count_where(self, db: AsyncSession, *criteria) -> int:
        """Count users matching arbitrary column criteria."""
        result = await db.execute(select(func.count(User.id)).where(*criteria))
        return result.scalar_one()


user_crud = CRUDUser(User)
