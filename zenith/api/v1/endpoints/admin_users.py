"""Admin user management and document verification."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_request_meta, require_permission
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.user import AdminPermission, User, UserRole
from zenith.schemas.admin import (
    AdminUserCreate,
    AdminUserDetail,
    AdminUserResponse,
    AdminUserUpdate,
    VerificationReviewRequest,
)
from zenith.schemas.common import Message, PaginatedResponse
from zenith.services.audit import RequestMeta
from zenith.services.user_admin_service import UserAdminService
from zenith.services.verification_service import VerificationService

router = APIRouter()


@router.get("", response_model=PaginatedResponse[AdminUserResponse])
async def list_users(
    search: Optional[str] = None,
    verified: Optional[bool] = None,
    role: Optional[UserRole] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_READ))
):
    """Search by email, name or university; filter by verification and role."""
    users, total = await user_crud.search(
        db,
        query=search,
        verified=verified,
        role=role,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[AdminUserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.post("", response_model=AdminUserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: AdminUserCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_CREATE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    return await UserAdminService(db).create_user(admin, body, meta=meta)


@router.get("/{user_id}", response_model=AdminUserDetail)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_READ))
):
    return await UserAdminService(db).get_detail(user_id)


@router.put("/{user_id}", response_model=AdminUserResponse)
async def update_user(
    user_id: int,
    body: AdminUserUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_UPDATE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    """
    Update a user.

    Promoting to admin is refused once the admin quota is full. Setting
    ``admin_verified`` for the first time notifies the user.
    """
    return await UserAdminService(db).update_user(user_id, admin, body, meta=meta)


@router.patch("/{user_id}/verification", response_model=AdminUserResponse)
async def review_verification(
    user_id: int,
    body: VerificationReviewRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_UPDATE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    """Approve or reject uploaded documents. Rejection needs a reason."""
    return await VerificationService(db).review(user_id, admin, body, meta=meta)


@router.delete("/{user_id}", response_model=Message)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.USERS_DELETE)),
    meta: RequestMeta = Depends(get_request_meta)
):
    """Delete a student account and everything it owns."""
    await UserAdminService(db).delete_user(user_id, admin, meta=meta)
    return Message(message="User deleted")
