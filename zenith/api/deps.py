"""Shared endpoint dependencies: current user, admin permissions, request meta."""

from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import AuthenticationError, PermissionDeniedError
from zenith.core.security import get_current_user_id
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.user import AdminPermission, User
from zenith.services.audit import RequestMeta


async def get_optional_user(
    db: AsyncSession = Depends(get_db),
    user_id: Optional[int] = Depends(get_current_user_id)
) -> Optional[User]:
    """The signed-in user, or None for anonymous requests."""
    if user_id is None:
        return None
    user = await user_crud.get(db, user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    user_id: Optional[int] = Depends(get_current_user_id)
) -> User:
    """The signed-in user. Raises 401 otherwise."""
    if user_id is None:
        raise AuthenticationError("Authentication required")
    user = await user_crud.get(db, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("Account is disabled")
    return user


async def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """The signed-in user, who must be an active admin."""
    if not user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return user


def require_permission(permission: AdminPermission) -> Callable:
    """Dependency factory: an admin holding ``permission`` (or ``*``)."""
    async def checker(admin: User = Depends(get_current_admin)) -> User:
        if not admin.has_permission(permission):
            raise PermissionDeniedError(f"Missing permission: {permission.value}")
        return admin

    return checker


def get_request_meta(request: Request) -> RequestMeta:
    """Client address and user agent for the audit log."""
    forwarded = request.headers.get("x-forwarded-for")
    ip = forwarded.split(",")[0].strip() if forwarded else (
        request.client.host if request.client else None
    )
    return RequestMeta(
        ip_address=ip,
        user_agent=request.headers.get("user-agent"),
    )
