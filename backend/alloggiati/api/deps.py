"""Shared API dependencies: single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from alloggiati.api.deps import get_db, get_user_context
"""

from alloggiati.auth.dependencies import (
    get_current_profile,
    get_optional_user_context,
    get_user_context,
    require_access,
)
from alloggiati.database import get_db

__all__ = [
    "get_db",
    "get_current_profile",
    "get_user_context",
    "get_optional_user_context",
    "require_access",
]
