"""Authentication endpoints - register, login, refresh, logout."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.api.deps import get_current_user
from zenith.core.config import settings
from zenith.core.exceptions import AuthenticationError, ConflictError
from zenith.core.logging import get_logger
from zenith.core.rate_limit import limiter
from zenith.core.security import (
    REFRESH,
    create_access_token,
    create_refresh_token,
    user_id_from_token,
)
from zenith.crud.user import user_crud
from zenith.db.session import get_db
from zenith.models.user import User, UserRole
from zenith.schemas.common import Message
from zenith.schemas.user import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    Token,
    UserCreate,
    UserResponse,
)

logger = get_logger(__name__)
router = APIRouter()


def issue_tokens(user: User) -> Token:
    """Access and refresh tokens for a user."""
    claims = {"email": user.email, "role": user.role.value}
    return Token(
        access_token=create_access_token(user.id, claims=claims),
        refresh_token=create_refresh_token(user.id),
    )


def set_auth_cookie(response: Response, access_token: str) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_REGISTER)
async def register(
    request: Request,
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a student account.

    Emails on the admin allowlist are created as admins with every permission.
    """
    if await user_crud.get_by_email(db, user_in.email):
        raise ConflictError("Email already registered")

    role = UserRole.ADMIN if user_in.email.lower() in settings.admin_allowlist else UserRole.STUDENT
    user = await user_crud.create(db, obj_in=user_in, role=role)
    logger.info(f"Registered user {user.id} ({role.value})")
    return user


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """Exchange email and password for tokens. Also sets the session cookie."""
    user = await user_crud.authenticate(
        db, email=credentials.email, password=credentials.password
    )
    if not user:
        raise AuthenticationError("Incorrect email or password")
    if not user.is_active:
        raise AuthenticationError("Account is disabled")

    user = await user_crud.update_last_login(db, user)
    tokens = issue_tokens(user)
    set_auth_cookie(response, tokens.access_token)
    return AuthResponse(**tokens.model_dump(), user=UserResponse.model_validate(user))


@router.post("/refresh", response_model=Token)
async def refresh_token(
    body: RefreshTokenRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Trade a refresh token for a new token pair."""
    user_id = user_id_from_token(body.refresh_token, expected_type=REFRESH)
    if user_id is None:
        raise AuthenticationError("Invalid refresh token")

    user = await user_crud.get(db, user_id)
    if not user or not user.is_active:
        raise AuthenticationError("Invalid refresh token")

    tokens = issue_tokens(user)
    set_auth_cookie(response, tokens.access_token)
    return tokens


@router.post("/logout", response_model=Message)
async def logout(response: Response):
    """Clear the session cookie. Bearer tokens simply expire."""
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return Message(message="Logged out")


@router.get("/me", response_model=UserResponse)
async def read_me(user: User = Depends(get_current_user)):
    return user
