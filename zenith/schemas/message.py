"""Direct messaging schemas."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, model_validator

from zenith.schemas.user import SellerSummary


class MessageCreate(BaseModel):
    """Send a message to another user."""
    receiver_id: int
    content: str = Field(..., max_length=5000)
    product_id: Optional[int] = None


class MessageProduct(BaseModel):
    """Listing a message refers to."""
    id: int
    title: str
    price: float

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Message response schema."""
    id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    product_id: Optional[int] = None
    sender: SellerSummary
    receiver: SellerSummary
    product: Optional[MessageProduct] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ConversationSummary(BaseModel):
    """One entry per counterpart in the caller's inbox."""
    user: SellerSummary
    last_message: MessageResponse
    unread_count: int


class MessageReadRequest(BaseModel):
    """Mark messages addressed to the caller as read."""
    message_ids: Optional[List[int]] = None
    conversation_with: Optional[int] = None

    @model_validator(mode="after")
    def check_target(self):
        if not self.message_ids and self.conversation_with is None:
            raise ValueError("Provide message_ids or conversation_with")
        return self
