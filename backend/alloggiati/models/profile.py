"""Profile model: staff accounts and the identity directory."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from alloggiati.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class Profile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Front-desk staff member or administrator.

    ``full_name`` is the display identity shown next to submissions.
    """

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(50), default=ROLE_USER, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Profile id={self.id} email={self.email!r} role={self.role!r}>"
