"""Admin overview: notification panel, dashboard, audit trail, identity."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_admin, require_permission
from zenith.crud.audit import audit_crud
from zenith.db.session import get_db
from zenith.models.user import AdminPermission, User
from zenith.schemas.admin import AdminMe, AdminNotifications, AuditLogResponse, DashboardStats
from zenith.schemas.common import PaginatedResponse
from zenith.services.admin_notifications import aggregate_admin_notifications
from zenith.services.dashboard_service import get_dashboard_stats

router = APIRouter()


@router.get("/notifications", response_model=AdminNotifications)
async def get_admin_notifications(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """
    Everything waiting on an admin.

    Pending user verifications, pending listings and up to 50 pending
    support messages grouped by priority, plus summary counts.
    """
    return await aggregate_admin_notifications(db)


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return await get_dashboard_stats(db)


@router.get("/audit/actions", response_model=PaginatedResponse[AuditLogResponse])
async def list_audit_actions(
    action: Optional[str] = None,
    admin_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_permission(AdminPermission.LOGS_READ))
):
    entries, total = await audit_crud.list_recent(
        db,
        action=action,
        admin_id=admin_id,
        skip=(page - 1) * per_page,
        limit=per_page,
    )
    return PaginatedResponse.create(
        items=[AuditLogResponse.model_validate(e) for e in entries],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/me", response_model=AdminMe)
async def get_admin_me(admin: User = Depends(get_current_admin)):
    return AdminMe(
        id=admin.id,
        email=admin.email,
        full_name=admin.full_name,
        role=admin.role,
        permissions=list(admin.admin_permissions or []),
    )
