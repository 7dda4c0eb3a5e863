"""SQLAlchemy models for Alloggiati Web.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from alloggiati.models.booking import Booking
from alloggiati.models.guest import DocumentType, Guest
from alloggiati.models.profile import Profile

__all__ = [
    "Booking",
    "DocumentType",
    "Guest",
    "Profile",
]
