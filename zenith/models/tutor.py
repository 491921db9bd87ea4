"""Tutor application model."""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import enum

from sqlalchemy import Integer, String, Text, Numeric, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, Mapped, mapped_column

from zenith.db.base import Base, JSONB

if TYPE_CHECKING:
    from zenith.models.user import User


class TutorApplicationStatus(str, enum.Enum):
    """Review state of a tutor application."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TutorApplication(Base):
    """A user's request to be listed as a tutor."""
    __tablename__ = "tutor_applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Application
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    institution: Mapped[str] = mapped_column(String(255), nullable=False)
    modules: Mapped[list] = mapped_column(JSONB, default=list)
    # Example modules: ["Accounting 101", "Business Statistics"]
    qualification: Mapped[str] = mapped_column(String(255), nullable=False)
    hourly_rate: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False)
    profile_picture_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    proof_of_registration_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    transcript_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Review
    status: Mapped[TutorApplicationStatus] = mapped_column(
        Enum(TutorApplicationStatus),
        default=TutorApplicationStatus.PENDING,
        nullable=False,
        index=True
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    verification_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reviewed_by_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now()
    )

    user: Mapped["User"] = relationship(
        "User",
        foreign_keys=[user_id],
        back_populates="tutor_applications",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<TutorApplication(id={self.id}, user_id={self.user_id}, status={self.status})>"
