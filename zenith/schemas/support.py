"""Support desk schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from zenith.models.support import SupportPriority, SupportStatus


class SupportMessageCreate(BaseModel):
    """A message to the support desk."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    category: str = Field("general", max_length=50)
    priority: SupportPriority = SupportPriority.NORMAL


class SupportMessageUpdate(BaseModel):
    """Admin changes to a support message."""
    status: Optional[SupportStatus] = None
    priority: Optional[SupportPriority] = None
    admin_response: Optional[str] = None


class SupportMessageResponse(BaseModel):
    """Support message response schema."""
    id: int
    user_id: Optional[int] = None
    name: str
    email: str
    subject: str
    message: str
    category: str
    priority: SupportPriority
    status: SupportStatus
    read: bool
    admin_response: Optional[str] = None
    responded_by_id: Optional[int] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SupportSubmitted(BaseModel):
    """Acknowledgement returned to the sender."""
    id: int
    message: str = "Your message has been received. We'll get back to you soon."
