"""Support desk message model."""

from datetime import datetime
from typing import Optional
import enum

from sqlalchemy import Integer, String, Text, DateTime, Boolean, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column

from zenith.db.base import Base


class SupportPriority(str, enum.Enum):
    """Priority buckets, lowest first."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class SupportStatus(str, enum.Enum):
    """Handling state of a support message."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class SupportMessage(Base):
    """A message sent to the support desk, by a user or a visitor."""
    __tablename__ = "support_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="general", nullable=False)
    priority: Mapped[SupportPriority] = mapped_column(
        Enum(SupportPriority),
        default=SupportPriority.NORMAL,
        nullable=False
    )
    status: Mapped[SupportStatus] = mapped_column(
        Enum(SupportStatus),
        default=SupportStatus.PENDING,
        nullable=False,
        index=True
    )
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    responded_by_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    responded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SupportMessage(id={self.id}, priority={self.priority}, status={self.status})>"
