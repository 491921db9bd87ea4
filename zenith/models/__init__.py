"""SQLAlchemy models for the Zenith application."""

from zenith.models.user import User, UserRole, AdminPermission
from zenith.models.product import Category, Product, ProductStatus, ProductCondition
from zenith.models.tutor import TutorApplication, TutorApplicationStatus
from zenith.models.support import SupportMessage, SupportPriority, SupportStatus
from zenith.models.notification import Notification
from zenith.models.message import Message
from zenith.models.wishlist import WishlistItem
from zenith.models.order import Order, OrderItem, OrderStatus
from zenith.models.audit import AdminAuditLog

__all__ = [
    "User",
    "UserRole",
    "AdminPermission",
    "Category",
    "Product",
    "ProductStatus",
    "ProductCondition",
    "TutorApplication",
    "TutorApplicationStatus",
    "SupportMessage",
    "SupportPriority",
    "SupportStatus",
    "Notification",
    "Message",
    "WishlistItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "AdminAuditLog",
]
