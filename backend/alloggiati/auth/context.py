"""Per-request identity value passed explicitly to every service call."""

import uuid
from dataclasses import dataclass

from alloggiati.models.profile import ROLE_ADMIN, Profile


@dataclass(frozen=True)
class UserContext:
    """Who is performing an operation.

    Built from the authenticated profile at the start of each request; it
    exists from login (token issue) until logout (token discarded).
    """

    user_id: uuid.UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_profile(cls, profile: Profile) -> "UserContext":
        return cls(user_id=profile.id, role=profile.role)
