"""CRUD operations for TutorApplication model."""

from typing import List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.tutor import TutorApplication, TutorApplicationStatus
from zenith.schemas.tutor import TutorApplicationCreate, TutorReviewRequest


class CRUDTutorApplication(CRUDBase[TutorApplication, TutorApplicationCreate, TutorReviewRequest]):
    """CRUD operations for TutorApplication model."""

    async def get_pending_for_user(
        self,
        db: AsyncSession,
        user_id: int
    ) -> Optional[TutorApplication]:
        result = await db.execute(
            select(TutorApplication).where(
                TutorApplication.user_id == user_id,
                TutorApplication.status == TutorApplicationStatus.PENDING
            )
        )
        return result.scalars().first()

    async def get_latest_for_user(
        self,
        db: AsyncSession,
        user_id: int
    ) -> Optional[TutorApplication]:
        """The user's most recent application, whatever its status."""
        result = await db.execute(
            select(TutorApplication)
            .where(TutorApplication.user_id == user_id)
            .order_by(TutorApplication.submitted_at.desc(), TutorApplication.id.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_status(
        self,
        db: AsyncSession,
        *,
        status: Optional[TutorApplicationStatus] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[TutorApplication], int]:
        """Applications in one (or any) status, newest first."""
        stmt = select(TutorApplication)
        if status is not None:
            stmt = stmt.where(TutorApplication.status == status)

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await db.execute(
            stmt.order_by(TutorApplication.submitted_at.desc(), TutorApplication.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def count_pending(self, db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count(TutorApplication.id)).where(
                TutorApplication.status == TutorApplicationStatus.PENDING
            )
        )
        return result.scalar_one()

    async def count_for_user(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(
            select(func.count(TutorApplication.id)).where(TutorApplication.user_id == user_id)
        )
        return result.scalar_one()


tutor_application_crud = CRUDTutorApplication(TutorApplication, resource_name="tutor application")
