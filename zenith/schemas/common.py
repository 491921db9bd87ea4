"""Shared response envelopes."""

from math import ceil
from typing import Generic, TypeVar, List, Optional
from pydantic import BaseModel, Field

T = TypeVar("T")


class Message(BaseModel):
    """Plain confirmation message."""
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of a listing endpoint."""
    items: List[T]
    total: int
    page: int = Field(ge=1)
    per_page: int = Field(ge=1, le=100)
    pages: int
    has_more: bool

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        page: int,
        per_page: int
    ) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            pages=ceil(total / per_page) if total else 0,
            has_more=(page * per_page) < total
        )


class ErrorResponse(BaseModel):
    """Body of every error response."""
    detail: str
    error_code: Optional[str] = None
