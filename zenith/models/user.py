"""User model for authentication, profile and verification."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional, List
import enum

from sqlalchemy import Integer, String, Text, DateTime, Boolean, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from zenith.db.base import Base, JSONB

if TYPE_CHECKING:
    from zenith.models.product import Product
    from zenith.models.tutor import TutorApplication
    from zenith.models.notification import Notification
    from zenith.models.message import Message
    from zenith.models.wishlist import WishlistItem
    from zenith.models.order import Order


class UserRole(str, enum.Enum):
    """User roles for authorization."""
    STUDENT = "student"
    ADMIN = "admin"


class AdminPermission(str, enum.Enum):
    """Fine-grained admin permissions. ALL grants everything."""
    USERS_READ = "users:read"
    USERS_CREATE = "users:create"
    USERS_UPDATE = "users:update"
    USERS_DELETE = "users:delete"
    PRODUCTS_READ = "products:read"
    PRODUCTS_UPDATE = "products:update"
    PRODUCTS_DELETE = "products:delete"
    TUTORS_REVIEW = "tutors:review"
    SUPPORT_MANAGE = "support:manage"
    LOGS_READ = "logs:read"
    ALL = "*"


class User(Base):
    """Marketplace user. Admins are users with the ADMIN role."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    # Profile
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    university: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Verification documents (URLs returned by the upload service)
    profile_picture_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    student_card_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    id_document_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    documents_uploaded: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    admin_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    verification_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Role and status
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole),
        default=UserRole.STUDENT,
        nullable=False
    )
    admin_permissions: Mapped[Optional[list]] = mapped_column(JSONB, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_tutor: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tutor_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now()
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # Relationships - everything a user owns goes with them
    products: Mapped[List["Product"]] = relationship(
        "Product",
        foreign_keys="Product.seller_id",
        back_populates="seller",
        cascade="all, delete-orphan"
    )
    tutor_applications: Mapped[List["TutorApplication"]] = relationship(
        "TutorApplication",
        foreign_keys="TutorApplication.user_id",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    notifications: Mapped[List["Notification"]] = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    sent_messages: Mapped[List["Message"]] = relationship(
        "Message",
        foreign_keys="Message.sender_id",
        back_populates="sender",
        cascade="all, delete-orphan"
    )
    received_messages: Mapped[List["Message"]] = relationship(
        "Message",
        foreign_keys="Message.receiver_id",
        back_populates="receiver",
        cascade="all, delete-orphan"
    )
    wishlist_items: Mapped[List["WishlistItem"]] = relationship(
        "WishlistItem",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="buyer",
        cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or "Anonymous"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN and self.is_active

    def has_permission(self, permission: AdminPermission) -> bool:
        """Check an admin permission; non-admins have none."""
        if not self.is_admin:
            return False
        granted = self.admin_permissions or []
        return AdminPermission.ALL.value in granted or permission.value in granted

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
