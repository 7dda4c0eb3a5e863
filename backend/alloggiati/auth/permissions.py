"""Route gating: which views a user may open.

``can_access`` is a pure predicate, evaluated before any service call.
"""

import enum

from alloggiati.auth.context import UserContext


class Resource(str, enum.Enum):
    """Views of the registration workflow."""

    REGISTER = "register"
    REVIEW = "review"
    EDIT_GUEST = "edit-guest"
    SUBMISSIONS = "submissions"
    DASHBOARD = "dashboard"


ADMIN_ONLY: frozenset[Resource] = frozenset({Resource.DASHBOARD})

LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"
HOME_PATH = "/register"

# Order matches the navigation bar.
_NAVIGATION: list[tuple[Resource, str, str]] = [
    (Resource.REGISTER, "New registration", "/register"),
    (Resource.REVIEW, "Drafts", "/review"),
    (Resource.SUBMISSIONS, "Completed", "/submissions"),
    (Resource.DASHBOARD, "Dashboard", "/dashboard"),
]


def can_access(user: UserContext | None, resource: Resource) -> bool:
    """Return True if ``user`` may open ``resource``."""
    if user is None:
        return False
    if resource in ADMIN_ONLY:
        return user.is_admin
    return True


def redirect_for(user: UserContext | None) -> str:
    """Where a denied request should be sent instead."""
    return LOGIN_PATH if user is None else HOME_PATH


def navigation_for(user: UserContext | None) -> list[dict[str, str]]:
    """Navigation entries visible to ``user``; empty when signed out."""
    if user is None:
        return []
    items = [
        {"resource": resource.value, "label": label, "path": path}
        for resource, label, path in _NAVIGATION
        if can_access(user, resource)
    ]
    items.append({"resource": "logout", "label": "Sign out", "path": LOGOUT_PATH})
    return items
