"""Fan-in of everything waiting on an admin.

Read-only: pending user verifications, pending listings and pending support
messages grouped by priority. No pagination; support messages are capped.
"""

from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.product import product_crud
from zenith.crud.support import support_crud
from zenith.crud.user import user_crud
from zenith.models.support import SupportMessage, SupportPriority
from zenith.schemas.admin import (
    AdminNotifications,
    NotificationSummary,
    PendingProduct,
    PendingVerification,
    SupportBuckets,
    SupportPreview,
)

SUPPORT_QUEUE_LIMIT = 50
PREVIEW_LENGTH = 100


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    """First ``length`` characters, with an ellipsis when truncated."""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def bucket_support_messages(messages: List[SupportMessage]) -> Dict[str, List[SupportPreview]]:
    """Group messages by priority, keeping their incoming order."""
    buckets: Dict[str, List[SupportPreview]] = {p.value: [] for p in SupportPriority}
    for message in messages:
        buckets[message.priority.value].append(
            SupportPreview(
                id=message.id,
                name=message.name,
                email=message.email,
                subject=message.subject,
                preview=preview(message.message),
                category=message.category,
                priority=message.priority,
                created_at=message.created_at,
            )
        )
    return buckets


async def aggregate_admin_notifications(db: AsyncSession) -> AdminNotifications:
    """Build the admin notification panel."""
    users = await user_crud.get_pending_verifications(db)
    pending_verifications = [
        PendingVerification(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            university=user.university,
            has_student_card=bool(user.student_card_url),
            has_id_document=bool(user.id_document_url),
            has_profile_picture=bool(user.profile_picture_url),
            updated_at=user.updated_at,
            created_at=user.created_at,
        )
        for user in users
    ]

    products = await product_crud.get_pending(db)
    pending_products = [
        PendingProduct(
            id=product.id,
            title=product.title,
            price=product.price,
            seller_id=product.seller_id,
            seller_name=product.seller.full_name,
            category=product.category.name,
            created_at=product.created_at,
        )
        for product in products
    ]

    messages = await support_crud.get_pending(db, limit=SUPPORT_QUEUE_LIMIT)
    buckets = bucket_support_messages(messages)

    summary = NotificationSummary(
        pending_verifications=len(pending_verifications),
        pending_products=len(pending_products),
        support_messages=len(messages),
        urgent=len(buckets["urgent"]),
        high=len(buckets["high"]),
        normal=len(buckets["normal"]),
        low=len(buckets["low"]),
        total=len(pending_verifications) + len(pending_products) + len(messages),
    )

    return AdminNotifications(
        pending_verifications=pending_verifications,
        pending_products=pending_products,
        support_messages=SupportBuckets(**buckets),
        summary=summary,
    )
