"""Submissions aggregator and admin directory: read side of finalized guests."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource, can_access, redirect_for
from alloggiati.errors import AuthorizationError, NotFoundError
from alloggiati.models.booking import Booking
from alloggiati.models.guest import GUEST_SUBMITTED, DocumentType, Guest
from alloggiati.models.profile import Profile
from alloggiati.schemas.guest import GuestUpdate
from alloggiati.services.aggregation import (
    Registration,
    SubmissionGroup,
    attach_additional_guests,
    group_by_booking,
    matches_filter,
)
from alloggiati.services.guest_service import apply_guest_changes

logger = logging.getLogger(__name__)


async def _profile_directory(db: AsyncSession) -> dict[uuid.UUID, str]:
    """Fetch every profile's display name in one query."""
    result = await db.execute(select(Profile.id, Profile.full_name))
    return {row.id: row.full_name for row in result}


async def list_submissions(db: AsyncSession, ctx: UserContext) -> dict[uuid.UUID, SubmissionGroup]:
    """Return finalized guests grouped by booking.

    Administrators see every user's submissions, labelled with the submitter's
    name; everyone else sees only their own.
    """
    profiles = await _profile_directory(db) if ctx.is_admin else None

    query = (
        select(Guest)
        .outerjoin(Booking, Guest.booking_id == Booking.id)
        .options(contains_eager(Guest.booking))
        .where(Guest.status == GUEST_SUBMITTED)
        .order_by(Guest.is_main_guest.desc(), Guest.created_at.asc())
    )
    if not ctx.is_admin:
        query = query.where(Guest.user_id == ctx.user_id)

    result = await db.execute(query)
    return group_by_booking(result.scalars().unique().all(), profiles)


async def update_submitted_guest(
    db: AsyncSession,
    ctx: UserContext,
    guest_id: uuid.UUID,
    body: GuestUpdate,
) -> Guest:
    """Correct a finalized guest. Administrators only; status is left as is."""
    if not ctx.is_admin:
        raise AuthorizationError(
            "Only administrators can edit submitted registrations",
            redirect_to="/submissions",
        )

    result = await db.execute(select(Guest).where(Guest.id == guest_id, Guest.status == GUEST_SUBMITTED))
    guest = result.scalar_one_or_none()
    if guest is None:
        raise NotFoundError("Submitted guest not found", redirect_to="/submissions")

    guest = await apply_guest_changes(db, guest, body)
    logger.info("Administrator %s edited submitted guest %s", ctx.user_id, guest.id)
    return guest


async def list_all_main_guests(
    db: AsyncSession,
    ctx: UserContext,
    search: str | None = None,
    document_type: DocumentType | None = None,
) -> list[Registration]:
    """Admin directory: finalized main guests with their additional guests, newest first."""
    if not can_access(ctx, Resource.DASHBOARD):
        raise AuthorizationError(
            "Access to dashboard requires administrator privileges",
            redirect_to=redirect_for(ctx),
        )

    result = await db.execute(
        select(Guest)
        .where(Guest.is_main_guest.is_(True), Guest.status == GUEST_SUBMITTED)
        .order_by(Guest.created_at.desc())
    )
    doc_filter = document_type.value if document_type is not None else None
    mains = [g for g in result.scalars().all() if matches_filter(g, search, doc_filter)]

    codes = {g.booking_code for g in mains if g.booking_code}
    additional: list[Guest] = []
    if codes:
        extra = await db.execute(
            select(Guest)
            .where(
                Guest.booking_code.in_(sorted(codes)),
                Guest.is_main_guest.is_(False),
                Guest.status == GUEST_SUBMITTED,
            )
            .order_by(Guest.created_at.asc())
        )
        additional = list(extra.scalars().all())

    return attach_additional_guests(mains, additional)
