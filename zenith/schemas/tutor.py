"""Tutor application schemas."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from zenith.models.tutor import TutorApplicationStatus


class TutorApplicationCreate(BaseModel):
    """Schema for applying to become a tutor."""
    full_name: str = Field(..., min_length=1, max_length=255)
    institution: str = Field(..., min_length=1, max_length=255)
    modules: List[str] = Field(..., min_length=1)
    qualification: str = Field(..., min_length=1, max_length=255)
    hourly_rate: float = Field(..., gt=0)
    bio: str = Field(..., min_length=1)
    profile_picture_url: Optional[str] = None
    proof_of_registration_url: Optional[str] = None
    transcript_url: Optional[str] = None


class TutorApplicationResponse(BaseModel):
    """Tutor application response schema."""
    id: int
    user_id: int
    full_name: str
    institution: str
    modules: List[str]
    qualification: str
    hourly_rate: float
    bio: str
    profile_picture_url: Optional[str] = None
    proof_of_registration_url: Optional[str] = None
    transcript_url: Optional[str] = None
    status: TutorApplicationStatus
    rejection_reason: Optional[str] = None
    verification_notes: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime

    model_config = {"from_attributes": True}


class TutorReviewRequest(BaseModel):
    """Admin decision on a tutor application.

    ``action`` is validated by the review workflow so an unknown action
    surfaces as a 400 rather than a schema error.
    """
    action: str
    rejection_reason: Optional[str] = None
    verification_notes: Optional[str] = None


class TutorProfile(BaseModel):
    """An approved tutor, as listed publicly."""
    application_id: int
    user_id: int
    full_name: str
    institution: str
    modules: List[str]
    qualification: str
    hourly_rate: float
    bio: str
    profile_picture_url: Optional[str] = None
