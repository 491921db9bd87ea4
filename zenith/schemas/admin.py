"""Admin console schemas: user management, moderation queues, dashboard."""

from datetime import datetime
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, EmailStr, Field

from zenith.models.user import UserRole
from zenith.models.support import SupportPriority
from zenith.schemas.user import UserResponse
from zenith.schemas.product import ProductResponse


class AdminUserCreate(BaseModel):
    """Create a user from the admin console."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    university: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    role: UserRole = UserRole.STUDENT
    admin_permissions: Optional[List[str]] = None


class AdminUserUpdate(BaseModel):
    """Admin changes to a user record."""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    university: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    location: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    is_active: Optional[bool] = None
    email_verified: Optional[bool] = None
    admin_verified: Optional[bool] = None
    verification_notes: Optional[str] = None
    role: Optional[UserRole] = None
    admin_permissions: Optional[List[str]] = None


class AdminUserResponse(UserResponse):
    """User record as seen by admins."""
    admin_permissions: Optional[List[str]] = None
    verified_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AdminUserCounts(BaseModel):
    """Activity totals for one user."""
    products: int
    orders: int
    tutor_applications: int


class AdminUserDetail(AdminUserResponse):
    """User detail with recent listings."""
    recent_products: List[ProductResponse] = []
    counts: AdminUserCounts


class VerificationReviewRequest(BaseModel):
    """Admin decision on a user's uploaded documents."""
    action: str
    rejection_reason: Optional[str] = None
    verification_notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Notification aggregation
# ---------------------------------------------------------------------------

class PendingVerification(BaseModel):
    """A user waiting for document verification."""
    id: int
    email: str
    full_name: str
    university: Optional[str] = None
    has_student_card: bool
    has_id_document: bool
    has_profile_picture: bool
    updated_at: Optional[datetime] = None
    created_at: datetime


class PendingProduct(BaseModel):
    """A listing waiting for approval."""
    id: int
    title: str
    price: float
    seller_id: int
    seller_name: str
    category: str
    created_at: datetime


class SupportPreview(BaseModel):
    """A pending support message, truncated for the queue view."""
    id: int
    name: str
    email: str
    subject: str
    preview: str
    category: str
    priority: SupportPriority
    created_at: datetime


class SupportBuckets(BaseModel):
    """Pending support messages grouped by priority."""
    urgent: List[SupportPreview] = []
    high: List[SupportPreview] = []
    normal: List[SupportPreview] = []
    low: List[SupportPreview] = []


class NotificationSummary(BaseModel):
    """Counts across the moderation queues."""
    pending_verifications: int
    pending_products: int
    support_messages: int
    urgent: int
    high: int
    normal: int
    low: int
    total: int


class AdminNotifications(BaseModel):
    """Everything waiting on an admin."""
    pending_verifications: List[PendingVerification]
    pending_products: List[PendingProduct]
    support_messages: SupportBuckets
    summary: NotificationSummary


# ---------------------------------------------------------------------------
# Dashboard and audit
# ---------------------------------------------------------------------------

class DashboardStats(BaseModel):
    """Headline numbers for the admin dashboard."""
    total_users: int
    total_admins: int
    active_users_7d: int
    verified_users: int
    total_products: int
    products_by_status: Dict[str, int]
    total_orders: int
    pending_tutor_applications: int
    pending_support_messages: int


class AuditLogResponse(BaseModel):
    """Audit log entry."""
    id: int
    admin_id: Optional[int] = None
    action: str
    target_type: str
    target_id: Optional[int] = None
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AdminMe(BaseModel):
    """The calling admin and their permissions."""
    id: int
    email: str
    full_name: str
    role: UserRole
    permissions: List[str]
