"""CRUD operations for Notification model."""

from typing import Any, Dict, Iterable, List, Optional, Tuple
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.notification import Notification
from zenith.schemas.notification import NotificationResponse, NotificationReadRequest


class CRUDNotification(CRUDBase[Notification, NotificationResponse, NotificationReadRequest]):
    """CRUD operations for Notification model."""

    async def notify(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        type: str,
        title: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Notification:
        """Create a notification for one user."""
        notification = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            notification_metadata=metadata or {},
        )
        db.add(notification)
        await db.flush()
        return notification

    async def notify_many(
        self,
        db: AsyncSession,
        *,
        user_ids: Iterable[int],
        type: str,
        title: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> int:
        """Create the same notification for several users."""
        count = 0
        for user_id in user_ids:
            db.add(Notification(
                user_id=user_id,
                type=type,
                title=title,
                message=message,
                notification_metadata=dict(metadata or {}),
            ))
            count += 1
        await db.flush()
        return count

    async def get_for_user(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        unread_only: bool = False,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[Notification], int]:
        """A user's notifications, newest first."""
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await db.execute(
            stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total

    async def unread_count(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.read.is_(False)
            )
        )
        return result.scalar_one()

    async def mark_read(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        notification_id: Optional[int] = None
    ) -> int:
        """Mark one (or every) unread notification of a user as read."""
        query = select(Notification.id).where(
            Notification.user_id == user_id,
            Notification.read.is_(False)
        )
        if notification_id is not None:
            query = query.where(Notification.id == notification_id)
        ids = list((await db.execute(query)).scalars().all())
        if not ids:
            return 0

        await db.execute(
            update(Notification)
            .where(Notification.id.in_(ids))
            .values(read=True)
        )
        return len(ids)


notification_crud = CRUDNotification(Notification)
