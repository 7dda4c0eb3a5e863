"""Pydantic v2 response schemas for booking endpoints."""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict


class BookingResponse(BaseModel):
    """Booking as shown in the selector and on review cards."""

    id: uuid.UUID
    code: str
    guest_name: str
    room_number: str
    check_in_date: date
    check_out_date: date
    status: str

    model_config = ConfigDict(from_attributes=True)


class BookingListResponse(BaseModel):
    """Active bookings, earliest check-in first."""

    items: list[BookingResponse]
    total: int
