"""Tutor applications and the public tutor directory."""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.crud.tutor import tutor_application_crud
from zenith.db.session import get_db
from zenith.models.tutor import TutorApplicationStatus
from zenith.models.user import User
from zenith.schemas.tutor import (
    TutorApplicationCreate,
    TutorApplicationResponse,
    TutorProfile,
)
from zenith.services.tutor_service import TutorService

router = APIRouter()


@router.get("", response_model=List[TutorProfile])
async def list_tutors(db: AsyncSession = Depends(get_db)):
    """Approved tutors, one entry per approved application."""
    applications, _ = await tutor_application_crud.get_by_status(
        db, status=TutorApplicationStatus.APPROVED, limit=100
    )
    return [
        TutorProfile(
            application_id=a.id,
            user_id=a.user_id,
            full_name=a.full_name,
            institution=a.institution,
            modules=a.modules or [],
            qualification=a.qualification,
            hourly_rate=a.hourly_rate,
            bio=a.bio,
            profile_picture_url=a.profile_picture_url,
        )
        for a in applications
    ]


@router.post("/apply", response_model=TutorApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_as_tutor(
    application_in: TutorApplicationCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    return await TutorService(db).apply(user, application_in)


@router.get("/me", response_model=Optional[TutorApplicationResponse])
async def get_my_application(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """The caller's latest application, or null if they never applied."""
    return await tutor_application_crud.get_latest_for_user(db, user.id)
