"""Order and order item models."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional, List
import enum

from sqlalchemy import Integer, String, Numeric, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from zenith.db.base import Base, JSONB

if TYPE_CHECKING:
    from zenith.models.user import User
    from zenith.models.product import Product


class OrderStatus(str, enum.Enum):
    """State of an order."""
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(Base):
    """A checkout by one buyer."""
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    buyer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus),
        default=OrderStatus.PENDING,
        nullable=False
    )

    subtotal: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    shipping_fee: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    total: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    shipping_address: Mapped[Optional[dict]] = mapped_column(JSONB, default=dict)
    # Example: {"first_name": "Thandi", "address": "12 Main Rd", "city": "Durban", ...}
    payment_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now()
    )

    buyer: Mapped["User"] = relationship("User", back_populates="orders")
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, buyer_id={self.buyer_id}, total={self.total})>"


class OrderItem(Base):
    """One line of an order. Title and price are snapshotted at checkout."""
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    seller_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
    product: Mapped[Optional["Product"]] = relationship("Product", back_populates="order_items")

    def __repr__(self) -> str:
        return f"<OrderItem(order_id={self.order_id}, product_id={self.product_id})>"
