"""API v1 router - aggregates all endpoint routers."""

from fastapi import APIRouter

from zenith.schemas.common import ErrorResponse
from zenith.api.v1.endpoints import (
    admin_overview,
    admin_products,
    admin_support,
    admin_tutors,
    admin_users,
    auth,
    health,
    messages,
    notifications,
    orders,
    products,
    profile,
    support,
    tutors,
    users,
    wishlist,
)

api_router = APIRouter(
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Permission denied"},
        404: {"model": ErrorResponse, "description": "Not found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
    }
)

# Public and student-facing
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(tutors.router, prefix="/tutors", tags=["tutors"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(wishlist.router, prefix="/wishlist", tags=["wishlist"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(support.router, prefix="/support", tags=["support"])

# Admin console
api_router.include_router(admin_overview.router, prefix="/admin", tags=["admin"])
api_router.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
api_router.include_router(admin_products.router, prefix="/admin/products", tags=["admin"])
api_router.include_router(admin_tutors.router, prefix="/admin/tutors", tags=["admin"])
api_router.include_router(admin_support.router, prefix="/admin/support", tags=["admin"])
