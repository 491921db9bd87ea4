"""The caller's in-app notifications."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.crud.notification import notification_crud
from zenith.db.session import get_db
from zenith.models.user import User
from zenith.schemas.common import PaginatedResponse
from zenith.schemas.notification import (
    MarkedRead,
    NotificationReadRequest,
    NotificationResponse,
    UnreadCount,
)

router = APIRouter()


@router.get("", response_model=PaginatedResponse[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    notifications, total = await notification_crud.get_for_user(
        db,
        user_id=user.id,
        unread_only=unread_only,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[NotificationResponse.model_validate(n) for n in notifications],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return UnreadCount(unread=await notification_crud.unread_count(db, user.id))


@router.patch("/read", response_model=MarkedRead)
async def mark_notifications_read(
    body: NotificationReadRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Mark one notification (``notification_id``) or all (``mark_all``) as read."""
    updated = await notification_crud.mark_read(
        db,
        user_id=user.id,
        notification_id=None if body.mark_all else body.notification_id,
    )
    return MarkedRead(updated=updated)
