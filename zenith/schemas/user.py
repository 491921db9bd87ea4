"""User, profile and authentication schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from zenith.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    university: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)


class UserCreate(UserBase):
    """Schema for registering a user."""
    password: str = Field(..., min_length=8, max_length=100)


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile."""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    university: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    location: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = Field(None, max_length=500)


class VerificationUpload(BaseModel):
    """Document URLs produced by the upload service."""
    student_card_url: Optional[str] = Field(None, max_length=500)
    id_document_url: Optional[str] = Field(None, max_length=500)
    profile_picture_url: Optional[str] = Field(None, max_length=500)


class UserResponse(UserBase):
    """The caller's own user record."""
    id: int
    full_name: str
    location: Optional[str] = None
    bio: Optional[str] = None
    profile_picture_url: Optional[str] = None
    student_card_url: Optional[str] = None
    id_document_url: Optional[str] = None
    role: UserRole
    is_active: bool
    email_verified: bool
    documents_uploaded: bool
    admin_verified: bool
    verification_notes: Optional[str] = None
    is_tutor: bool
    tutor_verified: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class SellerSummary(BaseModel):
    """Public view of a user, embedded in listings and messages."""
    id: int
    full_name: str
    university: Optional[str] = None
    profile_picture_url: Optional[str] = None
    admin_verified: bool = False

    model_config = {"from_attributes": True}


class PublicProfile(SellerSummary):
    """Public seller profile."""
    location: Optional[str] = None
    bio: Optional[str] = None
    is_tutor: bool = False
    active_listings: int = 0
    created_at: datetime


class Token(BaseModel):
    """JWT token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    """Tokens plus the authenticated user."""
    user: UserResponse


class LoginRequest(BaseModel):
    """Login request schema."""
    email: EmailStr
    password: str


class RefreshTokenRequest(BaseModel):
    """Refresh token request."""
    refresh_token: str

