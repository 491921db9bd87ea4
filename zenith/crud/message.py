"""CRUD operations for direct Message model."""

from typing import Dict, List, Optional
from sqlalchemy import select, update, or_, and_, case, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.message import Message
from zenith.schemas.message import MessageCreate, MessageReadRequest


class CRUDMessage(CRUDBase[Message, MessageCreate, MessageReadRequest]):
    """CRUD operations for Message model."""

    async def send(
        self,
        db: AsyncSession,
        *,
        sender_id: int,
        receiver_id: int,
        content: str,
        product_id: Optional[int] = None
    ) -> Message:
        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            product_id=product_id,
        )
        await self.save(db, message)
        await db.refresh(message, attribute_names=["sender", "receiver", "product"])
        return message

    async def get_for_user(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        conversation_with: Optional[int] = None,
        limit: int = 200
    ) -> List[Message]:
        """Messages the user sent or received, newest first."""
        if conversation_with is not None:
            condition = or_(
                and_(Message.sender_id == user_id, Message.receiver_id == conversation_with),
                and_(Message.sender_id == conversation_with, Message.receiver_id == user_id),
            )
        else:
            condition = or_(Message.sender_id == user_id, Message.receiver_id == user_id)

        result = await db.execute(
            select(Message)
            .where(condition)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_conversations(
        self,
        db: AsyncSession,
        *,
        user_id: int
    ) -> List[Dict]:
        """
        Group the user's messages by counterpart.

        Returns dicts with ``counterpart``, ``last_message`` and
        ``unread_count``, most recent conversation first.
        """
        counterpart_id = case(
            (Message.sender_id == user_id, Message.receiver_id),
            else_=Message.sender_id,
        )
        unread = case(
            (and_(Message.receiver_id == user_id, Message.read.is_(False)), 1),
            else_=0,
        )
        # Ids grow with send time, so the highest id is the latest message
        grouped = await db.execute(
            select(func.max(Message.id), func.sum(unread))
            .where(or_(Message.sender_id == user_id, Message.receiver_id == user_id))
            .group_by(counterpart_id)
        )
        unread_by_last = {last_id: int(count or 0) for last_id, count in grouped.all()}
        if not unread_by_last:
            return []

        result = await db.execute(
            select(Message)
            .where(Message.id.in_(unread_by_last))
            .order_by(Message.id.desc())
        )
        conversations = []
        for message in result.scalars().all():
            incoming = message.receiver_id == user_id
            conversations.append({
                "counterpart": message.sender if incoming else message.receiver,
                "last_message": message,
                "unread_count": unread_by_last[message.id],
            })
        return conversations

    async def mark_read(
        self,
        db: AsyncSession,
        *,
        user_id: int,
        message_ids: Optional[List[int]] = None,
        conversation_with: Optional[int] = None
    ) -> int:
        """Mark messages addressed to ``user_id`` as read."""
        query = select(Message.id).where(
            Message.receiver_id == user_id,
            Message.read.is_(False)
        )
        if message_ids:
            query = query.where(Message.id.in_(message_ids))
        if conversation_with is not None:
            query = query.where(Message.sender_id == conversation_with)
        ids = list((await db.execute(query)).scalars().all())
        if not ids:
            return 0

        await db.execute(
            update(Message)
            .where(Message.id.in_(ids))
            .values(read=True)
        )
        return len(ids)


message_crud = CRUDMessage(Message)
