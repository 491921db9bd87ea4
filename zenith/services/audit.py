"""Admin audit trail helpers."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from zenith.crud.audit import audit_crud
from zenith.models.audit import AdminAuditLog
from zenith.models.user import User


@dataclass(frozen=True)
class RequestMeta:
    """Where an admin action came from."""
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


async def record_admin_action(
    db: AsyncSession,
    admin: User,
    action: str,
    target_type: str,
    target_id: Optional[int] = None,
    old_values: Optional[Dict[str, Any]] = None,
    new_values: Optional[Dict[str, Any]] = None,
    meta: Optional[RequestMeta] = None,
) -> AdminAuditLog:
    """Append one entry to the audit log."""
    meta = meta or RequestMeta()
    return await audit_crud.record(
        db,
        admin_id=admin.id,
        action=action,
        target_type=target_type,
        target_id=target_id,
        old_values=old_values,
        new_values=new_values,
        ip_address=meta.ip_address,
        user_agent=meta.user_agent,
    )
