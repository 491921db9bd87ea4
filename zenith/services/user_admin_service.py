"""Admin user management: create, update, delete, detail."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.config import settings
from zenith.core.exceptions import ConflictError, PermissionDeniedError, ValidationError
from zenith.core.logging import get_logger, log_success, log_warn
from zenith.crud.order import order_crud
from zenith.crud.product import product_crud
from zenith.crud.tutor import tutor_application_crud
from zenith.crud.user import user_crud
from zenith.models.user import AdminPermission, User, UserRole
from zenith.schemas.admin import (
    AdminUserCounts,
    AdminUserCreate,
    AdminUserDetail,
    AdminUserResponse,
    AdminUserUpdate,
)
from zenith.schemas.product import ProductResponse
from zenith.schemas.user import UserCreate
from zenith.services.audit import RequestMeta, record_admin_action
from zenith.services.cache_service import cache
from zenith.services.verification_service import notify_verification_approved

logger = get_logger(__name__)

VALID_PERMISSIONS = {p.value for p in AdminPermission}


def _validate_permissions(permissions: Optional[list]) -> None:
    unknown = set(permissions or []) - VALID_PERMISSIONS
    if unknown:
        raise ValidationError(
            f"Unknown permissions: {', '.join(sorted(unknown))}",
            field="admin_permissions",
        )


class UserAdminService:
    """User management operations behind the admin console."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_admin_slot(self) -> None:
        if await user_crud.count_active_admins(self.db) >= settings.ADMIN_MAX_ADMINS:
            raise ConflictError(
                f"Maximum of {settings.ADMIN_MAX_ADMINS} administrators reached"
            )

    async def get_detail(self, user_id: int) -> AdminUserDetail:
        user = await user_crud.get_or_404(self.db, user_id)
        products = await product_crud.get_by_seller(self.db, seller_id=user.id, limit=5)
        counts = AdminUserCounts(
            products=await product_crud.count_by_seller(self.db, seller_id=user.id),
            orders=await order_crud.count_for_buyer(self.db, user.id),
            tutor_applications=await tutor_application_crud.count_for_user(self.db, user.id),
        )
        base = AdminUserResponse.model_validate(user)
        return AdminUserDetail(
            **base.model_dump(),
            recent_products=[ProductResponse.model_validate(p) for p in products],
            counts=counts,
        )

    async def create_user(
        self,
        admin: User,
        user_in: AdminUserCreate,
        meta: Optional[RequestMeta] = None,
    ) -> User:
        if await user_crud.get_by_email(self.db, user_in.email):
            raise ConflictError("Email already registered")
        _validate_permissions(user_in.admin_permissions)
        if user_in.role == UserRole.ADMIN:
            await self._ensure_admin_slot()

        user = await user_crud.create(
            self.db,
            obj_in=UserCreate(
                email=user_in.email,
                password=user_in.password,
                first_name=user_in.first_name,
                last_name=user_in.last_name,
                university=user_in.university,
                phone=user_in.phone,
            ),
            role=user_in.role,
            admin_permissions=user_in.admin_permissions,
            email_verified=True,
        )
        await record_admin_action(
            self.db,
            admin,
            action="CREATE_USER",
            target_type="user",
            target_id=user.id,
            new_values={"email": user.email, "role": user.role.value},
            meta=meta,
        )
        await cache.invalidate_dashboard()
        log_success(logger, f"User {user.id} created by admin {admin.id}")
        return user

    async def update_user(
        self,
        user_id: int,
        admin: User,
        user_in: AdminUserUpdate,
        meta: Optional[RequestMeta] = None,
    ) -> User:
        user = await user_crud.get_or_404(self.db, user_id)
        changes = user_in.model_dump(exclude_unset=True)
        _validate_permissions(changes.get("admin_permissions"))

        if changes.get("role") == UserRole.ADMIN and user.role != UserRole.ADMIN:
            await self._ensure_admin_slot()
            if not changes.get("admin_permissions") and not user.admin_permissions:
                changes["admin_permissions"] = [AdminPermission.ALL.value]

        was_verified = user.admin_verified
        old_values = {
            field: (getattr(user, field).value if field == "role" else getattr(user, field))
            for field in changes
        }

        for field, value in changes.items():
            setattr(user, field, value)
        if changes.get("admin_verified") and not was_verified:
            user.verified_at = datetime.now(timezone.utc)
        user = await user_crud.save(self.db, user)

        if user.admin_verified and not was_verified:
            await notify_verification_approved(self.db, user)

        await record_admin_action(
            self.db,
            admin,
            action="UPDATE_USER",
            target_type="user",
            target_id=user.id,
            old_values=old_values,
            new_values={
                k: (v.value if isinstance(v, UserRole) else v) for k, v in changes.items()
            },
            meta=meta,
        )
        await cache.invalidate_dashboard()
        return user

    async def delete_user(
        self,
        user_id: int,
        admin: User,
        meta: Optional[RequestMeta] = None,
    ) -> None:
        """
        Delete a user together with everything they own.

        Products, wishlist, messages, notifications, orders and tutor
        applications go with the user. Other buyers' order lines keep their
        snapshot and lose the link to the deleted product.
        """
        user = await user_crud.get_or_404(self.db, user_id)
        if user.role == UserRole.ADMIN:
            log_warn(logger, f"Admin {admin.id} tried to delete admin account {user.id}")
            raise PermissionDeniedError("Admin accounts cannot be deleted")

        snapshot = {"email": user.email, "role": user.role.value}
        await user_crud.remove(self.db, db_obj=user)
        await record_admin_action(
            self.db,
            admin,
            action="DELETE_USER",
            target_type="user",
            target_id=user_id,
            old_values=snapshot,
            meta=meta,
        )
        await cache.invalidate_dashboard()
        log_success(logger, f"User {user_id} deleted by admin {admin.id}")
