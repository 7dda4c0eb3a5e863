"""Guests API router: draft registration, review and finalize.

Drafts are isolated per user: each staff member only sees and edits the
guests they registered themselves.
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.api.deps import get_db, require_access
from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource
from alloggiati.models.guest import Guest
from alloggiati.schemas.auth import MessageResponse
from alloggiati.schemas.guest import (
    AdditionalGuestsCreate,
    DraftCreate,
    DraftCreatedResponse,
    DraftListResponse,
    FinalizeResponse,
    GuestDetailResponse,
    GuestResponse,
    GuestUpdate,
)
from alloggiati.services import guest_service

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


@router.post(
    "/drafts",
    response_model=DraftCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register guests for a booking as drafts",
)
async def create_drafts(
    body: DraftCreate,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REGISTER)),
) -> dict:
    """Save the main guest and any additional guests as drafts."""
    guest_ids = await guest_service.save_draft(
        db,
        ctx,
        body.booking_id,
        body.main_guest,
        body.additional_guests,
    )
    return {"booking_id": body.booking_id, "guest_ids": guest_ids}


@router.get(
    "/drafts",
    response_model=DraftListResponse,
    summary="List the current user's drafts",
)
async def list_drafts(
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REVIEW)),
) -> dict:
    """Return draft guests with their booking, main guests first."""
    items = await guest_service.list_drafts(db, ctx)
    return {"items": items, "total": len(items)}


@router.get(
    "/drafts/{guest_id}",
    response_model=GuestDetailResponse,
    summary="Get a draft guest for editing",
)
async def get_draft(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.EDIT_GUEST)),
) -> Guest:
    return await guest_service.get_draft(db, ctx, guest_id)


@router.put(
    "/drafts/{guest_id}",
    response_model=GuestResponse,
    summary="Update a draft guest",
)
async def update_draft(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.EDIT_GUEST)),
) -> Guest:
    """Partially update a draft. Only explicitly provided fields are changed."""
    return await guest_service.update_draft(db, ctx, guest_id, body)


@router.delete(
    "/drafts/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a draft guest",
)
async def delete_draft(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REVIEW)),
) -> dict:
    """Delete a draft. Deleting a guest that no longer exists succeeds."""
    deleted = await guest_service.delete_draft(db, ctx, guest_id)
    return {"message": "Guest deleted" if deleted else "Guest already removed"}


@router.post(
    "/drafts/{booking_id}/additional",
    response_model=list[GuestResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add guests to an existing draft registration",
)
async def add_additional_guests(
    booking_id: uuid.UUID,
    body: AdditionalGuestsCreate,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REGISTER)),
) -> list[Guest]:
    return await guest_service.add_additional_guests(db, ctx, booking_id, body.guests)


@router.post(
    "/finalize/{booking_id}",
    response_model=FinalizeResponse,
    summary="Finalize a booking's draft guests",
)
async def finalize(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.REVIEW)),
) -> dict:
    """Submit every draft under the booking. This cannot be undone."""
    submitted = await guest_service.finalize(db, ctx, booking_id)
    return {
        "booking_id": booking_id,
        "submitted": submitted,
        "message": "Registration finalized",
    }
