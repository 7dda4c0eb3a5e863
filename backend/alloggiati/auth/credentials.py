"""Password hashing and email/password authentication.

Uses bcrypt directly instead of passlib to avoid compatibility issues
between passlib and bcrypt 4.x+.
"""

import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.models.profile import Profile

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if ``plain_password`` matches the bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


async def authenticate(db: AsyncSession, email: str, password: str) -> Profile | None:
    """Return the profile matching the credentials, or None.

    Inactive profiles are returned as well; the caller decides how to report them.
    """
    result = await db.execute(select(Profile).where(Profile.email == email.lower()))
    profile = result.scalar_one_or_none()

    if profile is None or not verify_password(password, profile.hashed_password):
        logger.info("Failed login attempt for %s", email)
        return None
    return profile
