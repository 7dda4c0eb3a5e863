"""Auth API router: register, login, refresh, logout, me, navigation."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.api.deps import get_current_profile, get_db, get_optional_user_context, get_user_context
from alloggiati.auth.context import UserContext
from alloggiati.auth.credentials import authenticate, hash_password
from alloggiati.auth.jwt import REFRESH, create_token_pair, decode_token
from alloggiati.auth.permissions import navigation_for
from alloggiati.models.profile import ROLE_USER, Profile
from alloggiati.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    NavigationResponse,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _auth_response(profile: Profile) -> AuthResponse:
    tokens = create_token_pair(str(profile.id), profile.role)
    return AuthResponse(
        user=ProfileResponse.model_validate(profile),
        tokens=TokenResponse(**tokens),
    )


# ---------------------------------------------------------------------------
# POST /register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)) -> AuthResponse:
    """Register a new front-desk account. Administrators are promoted out of band."""
    email = body.email.lower()
    result = await db.execute(select(Profile).where(Profile.email == email))
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    profile = Profile(
        email=email,
        hashed_password=hash_password(body.password),
        full_name=body.full_name,
        role=ROLE_USER,
    )
    db.add(profile)
    await db.flush()
    await db.refresh(profile)

    logger.info("Registered profile %s", profile.id)
    return _auth_response(profile)


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)) -> AuthResponse:
    """Authenticate with email and password; starts a session."""
    profile = await authenticate(db, body.email, body.password)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not profile.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    logger.info("Profile %s logged in", profile.id)
    return _auth_response(profile)


# ---------------------------------------------------------------------------
# POST /refresh
# ---------------------------------------------------------------------------


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
    """Exchange a valid refresh token for a new token pair."""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired refresh token",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(body.refresh_token, expected_type=REFRESH)
        profile_id = uuid.UUID(payload.get("sub") or "")
    except (JWTError, ValueError):
        raise invalid from None

    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    profile = result.scalar_one_or_none()

    if profile is None or not profile.is_active:
        raise invalid

    return TokenResponse(**create_token_pair(str(profile.id), profile.role))


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post("/logout", response_model=MessageResponse)
async def logout(ctx: UserContext = Depends(get_user_context)) -> dict:
    """End the session. Tokens are stateless, so the client discards them."""
    logger.info("Profile %s logged out", ctx.user_id)
    return {"message": "Signed out"}


# ---------------------------------------------------------------------------
# GET /me, /navigation
# ---------------------------------------------------------------------------


@router.get("/me", response_model=ProfileResponse)
async def me(profile: Profile = Depends(get_current_profile)) -> Profile:
    """Return the currently authenticated profile."""
    return profile


@router.get("/navigation", response_model=NavigationResponse)
async def navigation(ctx: UserContext | None = Depends(get_optional_user_context)) -> dict:
    """Return the views the caller may open, in menu order. Empty when signed out."""
    return {"is_admin": ctx is not None and ctx.is_admin, "items": navigation_for(ctx)}
