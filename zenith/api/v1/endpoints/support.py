"""Public support desk submission."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_optional_user
from zenith.core.config import settings
from zenith.core.logging import get_logger
from zenith.core.rate_limit import limiter
from zenith.crud.support import support_crud
from zenith.db.session import get_db
from zenith.models.support import SupportStatus
from zenith.models.user import User
from zenith.schemas.support import SupportMessageCreate, SupportSubmitted
from zenith.services.cache_service import cache

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=SupportSubmitted, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_SUPPORT)
async def submit_support_message(
    request: Request,
    message_in: SupportMessageCreate,
    db: AsyncSession = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user)
):
    """Anyone may write to support; signed-in senders are linked to their account."""
    message = await support_crud.create(
        db,
        obj_in={
            **message_in.model_dump(),
            "user_id": user.id if user else None,
            "status": SupportStatus.PENDING,
        },
    )
    await cache.invalidate_dashboard()
    logger.info(f"Support message {message.id} received ({message.priority.value})")
    return SupportSubmitted(id=message.id)
