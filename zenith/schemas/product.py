"""Listing and category schemas."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from zenith.models.product import ProductCondition, ProductStatus
from zenith.schemas.user import SellerSummary


class CategoryResponse(BaseModel):
    """Category response schema."""
    id: int
    name: str
    slug: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductBase(BaseModel):
    """Base listing schema."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    # Zero once a listing sells out
    quantity: int = Field(1, ge=0)
    condition: ProductCondition
    location: Optional[str] = Field(None, max_length=255)
    university: Optional[str] = Field(None, max_length=255)
    images: List[str] = []
    pdf_file: Optional[str] = Field(None, max_length=500)


class ProductCreate(ProductBase):
    """Schema for submitting a listing."""
    quantity: int = Field(1, ge=1)
    category: str = Field(..., min_length=1, max_length=100)


class ProductStatusUpdate(BaseModel):
    """Seller-driven status change (only 'sold' is reachable this way)."""
    status: ProductStatus


class ProductVerifyRequest(BaseModel):
    """Admin decision on a pending listing."""
    approved: bool
    rejection_reason: Optional[str] = None
    verification_notes: Optional[str] = None


class ProductResponse(ProductBase):
    """Listing response schema."""
    id: int
    status: ProductStatus
    admin_approved: bool
    rejection_reason: Optional[str] = None
    seller: SellerSummary
    category: CategoryResponse
    created_at: datetime
    updated_at: Optional[datetime] = None
    sold_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AdminProductResponse(ProductResponse):
    """Listing with moderation details."""
    verification_notes: Optional[str] = None
    approved_by_id: Optional[int] = None
    approved_at: Optional[datetime] = None


class ProductFilters(BaseModel):
    """Values the marketplace can be filtered by."""
    categories: List[CategoryResponse]
    conditions: List[str]
    sort_fields: List[str]
