"""CRUD operations for SupportMessage model."""

from typing import List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.support import SupportMessage, SupportPriority, SupportStatus
from zenith.schemas.support import SupportMessageCreate, SupportMessageUpdate


class CRUDSupportMessage(CRUDBase[SupportMessage, SupportMessageCreate, SupportMessageUpdate]):
    """CRUD operations for SupportMessage model."""

    async def filter(
        self,
        db: AsyncSession,
        *,
        status: Optional[SupportStatus] = None,
        priority: Optional[SupportPriority] = None,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[SupportMessage], int]:
        """Support inbox for admins, newest first."""
        stmt = select(SupportMessage)
        if status is not None:
            stmt = stmt.where(SupportMessage.status == status)
        if priority is not None:
            stmt = stmt.where(SupportMessage.priority == priority)
        if category:
            stmt = stmt.where(SupportMessage.category == category)

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await db.execute(
            stmt.order_by(SupportMessage.created_at.desc(), SupportMessage.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def get_pending(
        self,
        db: AsyncSession,
        limit: int = 50
    ) -> List[SupportMessage]:
        """Newest pending messages for the admin queue."""
        messages, _ = await self.filter(db, status=SupportStatus.PENDING, limit=limit)
        return messages

    async def count_pending(self, db: AsyncSession) -> int:
        result = await db.execute(
            select(func.count(SupportMessage.id)).where(
                SupportMessage.status == SupportStatus.PENDING
            )
        )
        return result.scalar_one()


support_crud = CRUDSupportMessage(SupportMessage, resource_name="support message")
