"""In-app notification schemas."""

from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, model_validator


class NotificationResponse(BaseModel):
    """Notification response schema."""
    id: int
    type: str
    title: str
    message: str
    read: bool
    metadata: Optional[Dict[str, Any]] = Field(None, validation_alias="notification_metadata")
    created_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class NotificationReadRequest(BaseModel):
    """Mark one notification, or all of them, as read."""
    notification_id: Optional[int] = None
    mark_all: bool = False

    @model_validator(mode="after")
    def check_target(self):
        if self.notification_id is None and not self.mark_all:
            raise ValueError("Provide notification_id or mark_all")
        return self


class UnreadCount(BaseModel):
    """Number of unread notifications."""
    unread: int


class MarkedRead(BaseModel):
    """How many rows were marked read."""
    updated: int
