"""Admin support desk."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_request_meta, require_permission
from zenith.crud.support import support_crud
from zenith.db.session import get_db
from zenith.models.support import SupportPriority, SupportStatus
from zenith.models.user import AdminPermission, User
from zenith.schemas.common import Message, PaginatedResponse
from zenith.schemas.support import SupportMessageResponse, SupportMessageUpdate
from zenith.services.audit import RequestMeta, record_admin_action
from zenith.services.cache_service import cache

router = APIRouter()

support_admin = require_permission(AdminPermission.SUPPORT_MANAGE)


@router.get("", response_model=PaginatedResponse[SupportMessageResponse])
async def list_support_messages(
    status_filter: Optional[SupportStatus] = Query(None, alias="status"),
    priority: Optional[SupportPriority] = None,
    category: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(support_admin)
):
    messages, total = await support_crud.filter(
        db,
        status=status_filter,
        priority=priority,
        category=category,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[SupportMessageResponse.model_validate(m) for m in messages],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/{message_id}", response_model=SupportMessageResponse)
async def get_support_message(
    message_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(support_admin)
):
    """Fetch one message and mark it read."""
    message = await support_crud.get_or_404(db, message_id)
    if not message.read:
        message.read = True
        message = await support_crud.save(db, message)
    return message


@router.put("/{message_id}", response_model=SupportMessageResponse)
async def update_support_message(
    message_id: int,
    body: SupportMessageUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(support_admin),
    meta: RequestMeta = Depends(get_request_meta)
):
    """Change status or priority, or reply. Replying records who answered and when."""
    message = await support_crud.get_or_404(db, message_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    old_values = {
        "status": message.status.value,
        "priority": message.priority.value,
        "admin_response": message.admin_response,
    }

    for field, value in changes.items():
        setattr(message, field, value)
    message.read = True
    if "admin_response" in changes:
        message.responded_by_id = admin.id
        message.responded_at = datetime.now(timezone.utc)
    message = await support_crud.save(db, message)

    await record_admin_action(
        db,
        admin,
        action="UPDATE_SUPPORT_MESSAGE",
        target_type="support_message",
        target_id=message.id,
        old_values=old_values,
        new_values={k: getattr(v, "value", v) for k, v in changes.items()},
        meta=meta,
    )
    await cache.invalidate_dashboard()
    return message


@router.delete("/{message_id}", response_model=Message)
async def delete_support_message(
    message_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(support_admin),
    meta: RequestMeta = Depends(get_request_meta)
):
    message = await support_crud.get_or_404(db, message_id)
    snapshot = {"subject": message.subject, "email": message.email, "status": message.status.value}
    await support_crud.remove(db, db_obj=message)
    await record_admin_action(
        db,
        admin,
        action="DELETE_SUPPORT_MESSAGE",
        target_type="support_message",
        target_id=message_id,
        old_values=snapshot,
        meta=meta,
    )
    await cache.invalidate_dashboard()
    return Message(message="Support message deleted")
