"""Wishlist, checkout and order schemas."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, EmailStr, Field

from zenith.models.order import OrderStatus
from zenith.schemas.product import ProductResponse


class WishlistAdd(BaseModel):
    """Add a listing to the wishlist."""
    product_id: int


class WishlistItemResponse(BaseModel):
    """Wishlist entry with the listing it points at."""
    id: int
    product_id: int
    product: ProductResponse
    created_at: datetime

    model_config = {"from_attributes": True}


class CheckoutItem(BaseModel):
    """One line of a cart."""
    product_id: int
    quantity: int = Field(1, ge=1)


class ShippingAddress(BaseModel):
    """Delivery details captured at checkout."""
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: Optional[str] = None
    country: str = "South Africa"


class CheckoutRequest(BaseModel):
    """Checkout request schema."""
    items: List[CheckoutItem] = Field(..., min_length=1)
    shipping_address: ShippingAddress


class OrderItemResponse(BaseModel):
    """Order line response schema."""
    id: int
    product_id: Optional[int] = None
    seller_id: Optional[int] = None
    title: str
    unit_price: float
    quantity: int

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    """Order response schema."""
    id: int
    buyer_id: int
    status: OrderStatus
    subtotal: float
    shipping_fee: float
    total: float
    shipping_address: Optional[dict] = None
    payment_reference: Optional[str] = None
    items: List[OrderItemResponse]
    created_at: datetime

    model_config = {"from_attributes": True}


class PurchaseCheck(BaseModel):
    """Whether the caller has bought a listing."""
    product_id: int
    purchased: bool
