"""The caller's own profile and verification documents."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.user import User
from zenith.schemas.user import ProfileUpdate, UserResponse, VerificationUpload
from zenith.services.verification_service import VerificationService

router = APIRouter()


@router.get("", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)):
    return user


@router.patch("", response_model=UserResponse)
async def update_profile(
    profile_in: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """Update profile fields. Fields left out of the body are unchanged."""
    return await user_crud.update(db, db_obj=user, obj_in=profile_in)


@router.post("/verification", response_model=UserResponse)
async def upload_verification_documents(
    upload: VerificationUpload,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Attach document URLs from the upload service.

    With both a student card and an ID document on file the account enters
    the admin verification queue.
    """
    return await VerificationService(db).upload_documents(user, upload)
