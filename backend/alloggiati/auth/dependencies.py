"""FastAPI authentication dependencies for route protection."""

import uuid
from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.auth.context import UserContext
from alloggiati.auth.jwt import ACCESS, decode_token
from alloggiati.auth.permissions import Resource, can_access, redirect_for
from alloggiati.database import get_db
from alloggiati.errors import AuthorizationError
from alloggiati.models.profile import Profile

# Strict bearer: rejects the request automatically if no token provided
_bearer_scheme = HTTPBearer()

# Optional bearer: returns None if no token provided
_bearer_scheme_optional = HTTPBearer(auto_error=False)


async def _profile_from_token(db: AsyncSession, token: str) -> Profile | None:
    """Resolve an access token to an active profile, or None."""
    try:
        payload = decode_token(token, expected_type=ACCESS)
    except JWTError:
        return None

    sub: str | None = payload.get("sub")
    if sub is None:
        return None

    try:
        profile_id = uuid.UUID(sub)
    except ValueError:
        return None

    result = await db.execute(select(Profile).where(Profile.id == profile_id))
    profile = result.scalar_one_or_none()

    if profile is None or not profile.is_active:
        return None
    return profile


async def get_current_profile(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """Extract and validate the Bearer token, then return the authenticated profile.

    Raises:
        HTTPException 401: If the token is invalid, expired, of the wrong type,
            or the profile is missing or inactive.
    """
    profile = await _profile_from_token(db, credentials.credentials)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return profile


async def get_user_context(profile: Profile = Depends(get_current_profile)) -> UserContext:
    """Return the explicit identity value handed to service functions."""
    return UserContext.from_profile(profile)


async def get_optional_user_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme_optional),
    db: AsyncSession = Depends(get_db),
) -> UserContext | None:
    """Like ``get_user_context`` but returns ``None`` when signed out."""
    if credentials is None:
        return None
    profile = await _profile_from_token(db, credentials.credentials)
    return UserContext.from_profile(profile) if profile is not None else None


def require_access(resource: Resource) -> Callable[..., Awaitable[UserContext]]:
    """Build a dependency that gates a route on ``can_access``.

    Usage::

        @router.get("/registrations")
        async def list_registrations(ctx: UserContext = Depends(require_access(Resource.DASHBOARD))):
            ...
    """

    async def _gate(ctx: UserContext = Depends(get_user_context)) -> UserContext:
        if not can_access(ctx, resource):
            raise AuthorizationError(
                f"Access to {resource.value} requires administrator privileges",
                redirect_to=redirect_for(ctx),
            )
        return ctx

    return _gate
