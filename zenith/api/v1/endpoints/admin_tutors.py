"""Admin review of tutor applications."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_request_meta, require_permission
from zenith.crud.tutor import tutor_application_crud
from zenith.db.session import get_db
from zenith.models.tutor import TutorApplicationStatus
from zenith.models.user import AdminPermission, User
from zenith.schemas.common import PaginatedResponse
from zenith.schemas.tutor import TutorApplicationResponse, TutorReviewRequest
from zenith.services.audit import RequestMeta
from zenith.services.tutor_service import TutorService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[TutorApplicationResponse])
async def list_applications(
    status_filter: Optional[TutorApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.TUTORS_REVIEW))
):
    applications, total = await tutor_application_crud.get_by_status(
        db,
        status=status_filter,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[TutorApplicationResponse.model_validate(a) for a in applications],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.patch("/{application_id}/review", response_model=TutorApplicationResponse)
async def review_application(
    application_id: int,
    body: TutorReviewRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.TUTORS_REVIEW)),
    meta: RequestMeta = Depends(get_request_meta)
):
    """``action`` is ``approve`` or ``reject``; rejection needs a reason."""
    return await TutorService(db).review(application_id, admin, body, meta=meta)
