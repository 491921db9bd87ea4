"""Direct messages between users."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.core.exceptions import NotFoundError, ValidationError
from zenith.crud.message import message_crud
from zenith.crud.product import product_crud
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.user import User
from zenith.schemas.message import (
    ConversationSummary,
    MessageCreate,
    MessageReadRequest,
    MessageResponse,
)
from zenith.schemas.notification import MarkedRead
from zenith.schemas.user import SellerSummary

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_in: MessageCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    content = message_in.content.strip()
    if not content:
        raise ValidationError("Message content cannot be empty", field="content")
    if message_in.receiver_id == user.id:
        raise ValidationError("You cannot message yourself", field="receiver_id")

    receiver = await user_crud.get(db, message_in.receiver_id)
    if receiver is None or not receiver.is_active:
        raise NotFoundError("receiver", message_in.receiver_id)
    if message_in.product_id is not None:
        await product_crud.get_or_404(db, message_in.product_id)

    return await message_crud.send(
        db,
        sender_id=user.id,
        receiver_id=receiver.id,
        content=content,
        product_id=message_in.product_id,
    )


@router.get("", response_model=List[MessageResponse])
async def list_messages(
    conversation_with: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """The caller's messages, newest first."""
    return await message_crud.get_for_user(
        db, user_id=user.id, conversation_with=conversation_with
    )


@router.get("/conversations", response_model=List[ConversationSummary])
async def list_conversations(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """One entry per counterpart, most recent conversation first."""
    conversations = await message_crud.get_conversations(db, user_id=user.id)
    return [
        ConversationSummary(
            user=SellerSummary.model_validate(c["counterpart"]),
            last_message=MessageResponse.model_validate(c["last_message"]),
            unread_count=c["unread_count"],
        )
        for c in conversations
    ]


@router.patch("/read", response_model=MarkedRead)
async def mark_messages_read(
    body: MessageReadRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    updated = await message_crud.mark_read(
        db,
        user_id=user.id,
        message_ids=body.message_ids,
        conversation_with=body.conversation_with,
    )
    return MarkedRead(updated=updated)
