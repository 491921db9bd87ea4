"""Security utilities - JWT, password hashing, token extraction.

Two token types are issued, both HS256 JWTs whose ``sub`` is the user id:
an access token (also set as the session cookie) and a longer-lived refresh
token that is only accepted by ``/auth/refresh``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from zenith.core.config import settings

ACCESS = "access"
REFRESH = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Cookie sessions are checked when the header is absent
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login",
    auto_error=False
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(subject: str | int, token_type: str, lifetime: timedelta, claims: Optional[dict[str, Any]] = None) -> str:
    payload = dict(claims or {})
    # Reserved claims win over caller-supplied ones
    payload.update(
        sub=str(subject),
        type=token_type,
        exp=datetime.now(timezone.utc) + lifetime,
    )
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    subject: str | int,
    claims: Optional[dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create an access token. ``claims`` carries display data such as role."""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(subject, ACCESS, lifetime, claims)


def create_refresh_token(subject: str | int) -> str:
    return _encode(subject, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT; None when the signature or expiry is bad."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def user_id_from_token(token: Optional[str], expected_type: str = ACCESS) -> Optional[int]:
    """Return the user id carried by a token, or None if it is unusable."""
    if not token:
        return None

    payload = decode_token(token)
    if not payload or payload.get("type") != expected_type:
        return None

    try:
        return int(payload.get("sub"))
    except (ValueError, TypeError):
        return None


async def get_token(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme)
) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    return token or request.cookies.get(settings.AUTH_COOKIE_NAME)


async def get_current_user_id(
    token: Optional[str] = Depends(get_token)
) -> Optional[int]:
    """
    Get current user ID from token.
    Returns None if no token or invalid token (allows anonymous access).
    """
    return user_id_from_token(token)
