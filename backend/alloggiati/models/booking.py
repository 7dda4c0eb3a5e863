"""Booking model: reservations imported from the reservation system."""

from datetime import date, datetime

from sqlalchemy import Date, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from alloggiati.database import Base, UUIDPrimaryKeyMixin

BOOKING_ACTIVE = "active"
BOOKING_COMPLETED = "completed"


class Booking(UUIDPrimaryKeyMixin, Base):
    """A reservation that guests are registered against.

    Rows are created outside this service; the only write performed here is
    the ``active -> completed`` transition when a guest group is finalized.
    """

    __tablename__ = "bookings"

    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    guest_name: Mapped[str] = mapped_column(String(255), nullable=False)  # booking holder
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(50),
        default=BOOKING_ACTIVE,
        index=True,
    )  # active, completed, cancelled
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    __table_args__ = (Index("ix_bookings_check_in_date", "check_in_date"),)

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, code={self.code!r}, room={self.room_number!r}, status={self.status})>"
