"""Category and Product (listing) models."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional, List
import enum

from sqlalchemy import Integer, String, Text, Numeric, DateTime, Boolean, ForeignKey, Enum, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from zenith.db.base import Base, JSONB

if TYPE_CHECKING:
    from zenith.models.user import User
    from zenith.models.wishlist import WishlistItem
    from zenith.models.order import OrderItem
    from zenith.models.message import Message


class ProductStatus(str, enum.Enum):
    """Lifecycle of a listing."""
    PENDING = "pending"
    ACTIVE = "active"
    REJECTED = "rejected"
    SOLD = "sold"


class ProductCondition(str, enum.Enum):
    """Condition of the item being sold."""
    NEW = "new"
    LIKE_NEW = "like-new"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


# Allowed status changes. SOLD and REJECTED are terminal.
LISTING_TRANSITIONS: dict[ProductStatus, frozenset[ProductStatus]] = {
    ProductStatus.PENDING: frozenset({ProductStatus.ACTIVE, ProductStatus.REJECTED}),
    ProductStatus.ACTIVE: frozenset({ProductStatus.SOLD}),
    ProductStatus.REJECTED: frozenset(),
    ProductStatus.SOLD: frozenset(),
}


class Category(Base):
    """Product category, addressed by slug."""
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    products: Mapped[List["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"


class Product(Base):
    """A listing: something a student is selling."""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    condition: Mapped[ProductCondition] = mapped_column(Enum(ProductCondition), nullable=False)
    status: Mapped[ProductStatus] = mapped_column(
        Enum(ProductStatus),
        default=ProductStatus.PENDING,
        nullable=False,
        index=True
    )

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    university: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    images: Mapped[Optional[list]] = mapped_column(JSONB, default=list)
    pdf_file: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    seller_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True
    )

    # Moderation
    admin_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    approved_by_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verification_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sold_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now()
    )

    # Relationships
    seller: Mapped["User"] = relationship(
        "User",
        foreign_keys=[seller_id],
        back_populates="products",
        lazy="selectin"
    )
    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        lazy="selectin"
    )
    wishlist_items: Mapped[List["WishlistItem"]] = relationship(
        "WishlistItem",
        back_populates="product",
        cascade="all, delete-orphan"
    )
    # Order history keeps its snapshot when a listing is removed
    order_items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="product"
    )
    messages: Mapped[List["Message"]] = relationship(
        "Message",
        back_populates="product"
    )

    __table_args__ = (
        Index('ix_products_status_created', 'status', 'created_at'),
    )

    def can_transition_to(self, target: ProductStatus) -> bool:
        return target in LISTING_TRANSITIONS[self.status]

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, title={self.title}, status={self.status})>"
