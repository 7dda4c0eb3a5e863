"""Booking selector: read access to reservations."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.errors import NotFoundError
from alloggiati.models.booking import BOOKING_ACTIVE, Booking

logger = logging.getLogger(__name__)


async def list_active_bookings(db: AsyncSession) -> list[Booking]:
    """Return active bookings, earliest check-in first."""
    result = await db.execute(
        select(Booking)
        .where(Booking.status == BOOKING_ACTIVE)
        .order_by(Booking.check_in_date.asc(), Booking.room_number.asc())
    )
    return list(result.scalars().all())


async def get_booking(db: AsyncSession, booking_id: uuid.UUID) -> Booking:
    """Return a booking by id or raise ``NotFoundError``."""
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()
    if booking is None:
        raise NotFoundError("Booking not found", redirect_to="/register")
    return booking
