"""CRUD operations for AdminAuditLog model."""

from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.base import CRUDBase
from zenith.models.audit import AdminAuditLog
from zenith.schemas.admin import AuditLogResponse


class CRUDAuditLog(CRUDBase[AdminAuditLog, AuditLogResponse, AuditLogResponse]):
    """Audit entries are only ever appended and listed."""

    async def record(
        self,
        db: AsyncSession,
        *,
        admin_id: int,
        action: str,
        target_type: str,
        target_id: Optional[int] = None,
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> AdminAuditLog:
        entry = AdminAuditLog(
            admin_id=admin_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.add(entry)
        await db.flush()
        return entry

    async def list_recent(
        self,
        db: AsyncSession,
        *,
        action: Optional[str] = None,
        admin_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[AdminAuditLog], int]:
        stmt = select(AdminAuditLog)
        if action:
            stmt = stmt.where(AdminAuditLog.action == action)
        if admin_id is not None:
            stmt = stmt.where(AdminAuditLog.admin_id == admin_id)

        total = (
            await db.execute(select(func.count()).select_from(stmt.subquery()))
        ).scalar_one()
        result = await db.execute(
            stmt.order_by(AdminAuditLog.created_at.desc(), AdminAuditLog.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all()), total


audit_crud = CRUDAuditLog(AdminAuditLog, resource_name="audit entry")
