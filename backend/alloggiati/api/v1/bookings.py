"""Bookings API router: the booking selector.

Bookings are imported from the reservation system; this router is read-only.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.api.deps import get_db, require_access
from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource
from alloggiati.models.booking import Booking
from alloggiati.schemas.booking import BookingListResponse, BookingResponse
from alloggiati.services import booking_service

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List active bookings",
)
async def list_bookings(
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REGISTER)),
) -> dict:
    """Return active bookings ordered by check-in date, earliest first."""
    items = await booking_service.list_active_bookings(db)
    return {"items": items, "total": len(items)}


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REGISTER)),
) -> Booking:
    """Return a single booking."""
    return await booking_service.get_booking(db, booking_id)
