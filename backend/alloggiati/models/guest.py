"""Guest domain model."""

import enum
import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from alloggiati.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

GUEST_DRAFT = "draft"
GUEST_SUBMITTED = "submitted"


class DocumentType(str, enum.Enum):
    """Identity documents accepted at check-in, stored by their Italian label."""

    ID_CARD = "Carta d'identità"
    PASSPORT = "Passaporto"
    DRIVING_LICENSE = "Patente"


class Guest(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A person staying under a booking.

    Column names follow the historical schema (camelCase for the identity
    fields), attribute names are snake_case.
    """

    __tablename__ = "guests"

    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    booking_code: Mapped[str | None] = mapped_column(String(50), index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_main_guest: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    first_name: Mapped[str] = mapped_column("firstName", String(100), nullable=False)
    last_name: Mapped[str] = mapped_column("lastName", String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    document_type: Mapped[str] = mapped_column("documentType", String(50), nullable=False)
    document_number: Mapped[str] = mapped_column("documentNumber", String(50), nullable=False)
    stay_duration: Mapped[int] = mapped_column("stayDuration", Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default=GUEST_DRAFT, nullable=False, index=True)

    # Relationships
    booking: Mapped["Booking | None"] = relationship("Booking", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint('"stayDuration" >= 1', name="ck_guests_stay_duration_positive"),
        CheckConstraint("status IN ('draft', 'submitted')", name="ck_guests_status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Guest(id={self.id}, booking_id={self.booking_id}, main={self.is_main_guest}, status={self.status})>"
        )
