"""Pydantic schemas for request/response validation."""

from zenith.schemas.common import Message, PaginatedResponse, ErrorResponse
from zenith.schemas.user import (
    UserCreate,
    UserResponse,
    ProfileUpdate,
    SellerSummary,
    Token,
)
from zenith.schemas.product import (
    ProductCreate,
    ProductResponse,
    CategoryResponse,
)
from zenith.schemas.tutor import TutorApplicationCreate, TutorApplicationResponse
from zenith.schemas.support import SupportMessageCreate, SupportMessageResponse
from zenith.schemas.notification import NotificationResponse
from zenith.schemas.message import MessageCreate, MessageResponse
from zenith.schemas.order import CheckoutRequest, OrderResponse

__all__ = [
    "Message",
    "PaginatedResponse",
    "ErrorResponse",
    "UserCreate",
    "UserResponse",
    "ProfileUpdate",
    "SellerSummary",
    "Token",
    "ProductCreate",
    "ProductResponse",
    "CategoryResponse",
    "TutorApplicationCreate",
    "TutorApplicationResponse",
    "SupportMessageCreate",
    "SupportMessageResponse",
    "NotificationResponse",
    "MessageCreate",
    "MessageResponse",
    "CheckoutRequest",
    "OrderResponse",
]
