"""Rate limiting for unauthenticated write endpoints (login, register, support)."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from zenith.core.config import settings


def client_key(request: Request) -> str:
    """Key requests by the original client address when behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or get_remote_address(request)


# In-memory by default; point RATE_LIMIT_STORAGE_URI at Redis for multi-worker deployments
limiter = Limiter(
    key_func=client_key,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    default_limits=[],
    enabled=settings.RATE_LIMIT_ENABLED,
)
