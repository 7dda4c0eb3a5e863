"""Guest draft editor and the review/finalize workflow.

Drafts belong to the staff member who created them. Only ``finalize`` moves a
guest out of ``draft``, and nothing moves it back.
"""

import logging
import uuid
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.auth.context import UserContext
from alloggiati.errors import AuthorizationError, DataAccessError, NotFoundError, ValidationError
from alloggiati.models.booking import BOOKING_ACTIVE, BOOKING_COMPLETED, Booking
from alloggiati.models.guest import GUEST_DRAFT, GUEST_SUBMITTED, Guest
from alloggiati.schemas.guest import EDITABLE_FIELDS, AdditionalGuestIn, GuestIn, GuestUpdate
from alloggiati.services.booking_service import get_booking

logger = logging.getLogger(__name__)

REVIEW_PATH = "/review"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _new_guest(
    ctx: UserContext,
    booking: Booking,
    data: GuestIn,
    *,
    is_main: bool,
    default_stay: int | None = None,
) -> Guest:
    fields = data.model_dump(mode="json")
    if fields.get("stay_duration") is None:
        fields["stay_duration"] = default_stay
    return Guest(
        **fields,
        booking_id=booking.id,
        booking_code=booking.code,
        user_id=ctx.user_id,
        is_main_guest=is_main,
        status=GUEST_DRAFT,
    )


async def _insert_additional_guests(
    db: AsyncSession,
    ctx: UserContext,
    booking: Booking,
    guests: Sequence[AdditionalGuestIn],
    default_stay: int,
) -> list[Guest]:
    rows = [_new_guest(ctx, booking, g, is_main=False, default_stay=default_stay) for g in guests]
    if rows:
        db.add_all(rows)
        await db.flush()
    return rows


async def _get_guest(db: AsyncSession, guest_id: uuid.UUID) -> Guest | None:
    result = await db.execute(select(Guest).where(Guest.id == guest_id))
    return result.scalar_one_or_none()


async def _has_main_guest(db: AsyncSession, booking_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(Guest.id).where(Guest.booking_id == booking_id, Guest.is_main_guest.is_(True)).limit(1)
    )
    return result.first() is not None


async def apply_guest_changes(db: AsyncSession, guest: Guest, body: GuestUpdate) -> Guest:
    """Copy the explicitly provided editable fields onto ``guest``."""
    changes = {k: v for k, v in body.model_dump(exclude_unset=True, mode="json").items() if k in EDITABLE_FIELDS}
    if not changes:
        raise ValidationError("No fields to update")

    for name, value in changes.items():
        setattr(guest, name, value)

    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    return guest


# ---------------------------------------------------------------------------
# Draft editor
# ---------------------------------------------------------------------------


async def save_draft(
    db: AsyncSession,
    ctx: UserContext,
    booking_id: uuid.UUID,
    main_guest: GuestIn,
    additional_guests: Sequence[AdditionalGuestIn] = (),
) -> list[uuid.UUID]:
    """Store a new registration as drafts and return the ids, main guest first.

    The main guest is inserted before the additional guests. Both inserts run
    in the caller's transaction; if the additional batch fails the main guest
    is rolled back too, so a half-saved group is never left behind.
    """
    booking = await get_booking(db, booking_id)
    if booking.status != BOOKING_ACTIVE:
        raise ValidationError(
            "Booking is not active",
            errors={"booking_id": f"status is {booking.status!r}"},
            redirect_to="/register",
        )
    if await _has_main_guest(db, booking.id):
        raise ValidationError(
            "Booking already has a main guest; add guests to the existing registration",
            errors={"booking_id": "already registered"},
            redirect_to=REVIEW_PATH,
        )

    try:
        main = _new_guest(ctx, booking, main_guest, is_main=True)
        db.add(main)
        await db.flush()
        extras = await _insert_additional_guests(db, ctx, booking, additional_guests, main.stay_duration)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Saving draft registration for booking %s failed; rolled back", booking_id)
        raise DataAccessError("Could not save the registration; nothing was stored") from exc

    logger.info(
        "User %s saved draft registration for booking %s (%d guests)",
        ctx.user_id,
        booking.code,
        1 + len(extras),
    )
    return [main.id, *(g.id for g in extras)]


async def add_additional_guests(
    db: AsyncSession,
    ctx: UserContext,
    booking_id: uuid.UUID,
    guests: Sequence[AdditionalGuestIn],
) -> list[Guest]:
    """Append additional guests to the caller's draft group for a booking."""
    result = await db.execute(
        select(Guest).where(
            Guest.booking_id == booking_id,
            Guest.user_id == ctx.user_id,
            Guest.is_main_guest.is_(True),
            Guest.status == GUEST_DRAFT,
        )
    )
    main = result.scalar_one_or_none()
    if main is None or main.booking is None:
        raise NotFoundError("No draft registration for this booking", redirect_to="/register")

    rows = await _insert_additional_guests(db, ctx, main.booking, guests, main.stay_duration)
    for row in rows:
        await db.refresh(row)
    logger.info("User %s added %d guests to booking %s", ctx.user_id, len(rows), main.booking_code)
    return rows


# ---------------------------------------------------------------------------
# Review workflow
# ---------------------------------------------------------------------------


async def list_drafts(db: AsyncSession, ctx: UserContext) -> list[Guest]:
    """Return the caller's drafts with their bookings, main guests first."""
    result = await db.execute(
        select(Guest)
        .where(Guest.user_id == ctx.user_id, Guest.status == GUEST_DRAFT)
        .order_by(Guest.is_main_guest.desc(), Guest.created_at.asc())
    )
    return list(result.scalars().all())


async def get_draft(db: AsyncSession, ctx: UserContext, guest_id: uuid.UUID) -> Guest:
    """Return one of the caller's drafts for editing."""
    result = await db.execute(
        select(Guest).where(
            Guest.id == guest_id,
            Guest.user_id == ctx.user_id,
            Guest.status == GUEST_DRAFT,
        )
    )
    guest = result.scalar_one_or_none()
    if guest is None:
        raise NotFoundError("Guest not found or no longer editable", redirect_to=REVIEW_PATH)
    return guest


async def update_draft(
    db: AsyncSession,
    ctx: UserContext,
    guest_id: uuid.UUID,
    body: GuestUpdate,
) -> Guest:
    """Edit a draft. Only the owner may, and only while it is a draft."""
    guest = await _get_guest(db, guest_id)
    if guest is None or guest.status != GUEST_DRAFT:
        raise NotFoundError("Guest not found or no longer editable", redirect_to=REVIEW_PATH)
    if guest.user_id != ctx.user_id:
        raise AuthorizationError("You can only edit your own drafts", redirect_to=REVIEW_PATH)

    guest = await apply_guest_changes(db, guest, body)
    logger.info("User %s updated draft guest %s", ctx.user_id, guest.id)
    return guest


async def delete_draft(db: AsyncSession, ctx: UserContext, guest_id: uuid.UUID) -> bool:
    """Delete a draft. Returns False when it was already gone."""
    guest = await _get_guest(db, guest_id)
    if guest is None:
        return False
    if guest.user_id != ctx.user_id:
        raise AuthorizationError("You can only delete your own drafts", redirect_to=REVIEW_PATH)
    if guest.status != GUEST_DRAFT:
        raise AuthorizationError("Submitted guests cannot be deleted", redirect_to=REVIEW_PATH)

    await db.delete(guest)
    await db.flush()
    logger.info("User %s deleted draft guest %s", ctx.user_id, guest_id)
    return True


async def finalize(db: AsyncSession, ctx: UserContext, booking_id: uuid.UUID) -> int:
    """Submit every draft of the caller under a booking, all or nothing.

    Marks the booking ``completed``. Returns the number of guests submitted.

    Raises:
        NotFoundError: no drafts left for this booking (e.g. already finalized).
        ValidationError: the drafts do not contain exactly one main guest.
        DataAccessError: the update failed; every guest is still a draft.
    """
    result = await db.execute(
        select(Guest).where(
            Guest.booking_id == booking_id,
            Guest.user_id == ctx.user_id,
            Guest.status == GUEST_DRAFT,
        )
    )
    drafts = list(result.scalars().all())
    if not drafts:
        raise NotFoundError("No draft guests to finalize for this booking", redirect_to=REVIEW_PATH)

    mains = sum(1 for g in drafts if g.is_main_guest)
    if mains != 1:
        raise ValidationError(
            "A registration needs exactly one main guest before it can be finalized",
            errors={"is_main_guest": f"found {mains} main guests"},
        )

    try:
        await db.execute(
            update(Guest)
            .where(Guest.id.in_([g.id for g in drafts]), Guest.status == GUEST_DRAFT)
            .values(status=GUEST_SUBMITTED)
        )
        await db.execute(update(Booking).where(Booking.id == booking_id).values(status=BOOKING_COMPLETED))
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Finalizing booking %s failed; rolled back", booking_id)
        raise DataAccessError("Finalization failed; the registration is still a draft") from exc

    logger.info("User %s finalized booking %s (%d guests)", ctx.user_id, booking_id, len(drafts))
    return len(drafts)
