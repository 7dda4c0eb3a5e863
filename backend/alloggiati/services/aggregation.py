"""Pure grouping and filtering over fetched guest rows.

Nothing here touches the database: callers fetch rows once and hand them in,
which keeps these functions cheap to unit test with plain objects.
"""

import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alloggiati.models.booking import Booking
    from alloggiati.models.guest import Guest


@dataclass
class SubmissionGroup:
    """A booking together with the guests registered under it."""

    booking: "Booking"
    guests: list["Guest"] = field(default_factory=list)
    submitted_by: str | None = None

    @property
    def main_guest(self) -> "Guest | None":
        return next((g for g in self.guests if g.is_main_guest), None)


@dataclass
class Registration:
    """Admin directory row: a main guest and the guests who came with them."""

    main_guest: "Guest"
    additional_guests: list["Guest"] = field(default_factory=list)


def main_guest_first(guests: Iterable["Guest"]) -> list["Guest"]:
    """Stable sort putting main guests ahead of additional ones."""
    return sorted(guests, key=lambda g: not g.is_main_guest)


def group_by_booking(
    guests: Iterable["Guest"],
    profiles: Mapping[uuid.UUID, str] | None = None,
) -> dict[uuid.UUID, SubmissionGroup]:
    """Group guest rows into submission groups keyed by booking id.

    Guests whose booking did not resolve (``booking`` is None) are skipped.
    When ``profiles`` (owner id -> full name) is given, each group is labelled
    with the name of its main guest's owner, or of any member's owner if the
    group has no main guest.
    """
    groups: dict[uuid.UUID, SubmissionGroup] = {}
    for guest in guests:
        if guest.booking is None:
            continue
        group = groups.get(guest.booking_id)
        if group is None:
            group = groups[guest.booking_id] = SubmissionGroup(booking=guest.booking)
        group.guests.append(guest)

    for group in groups.values():
        group.guests = main_guest_first(group.guests)
        if profiles is not None:
            owner = group.main_guest or group.guests[0]
            group.submitted_by = profiles.get(owner.user_id)
    return groups


def matches_filter(guest: "Guest", search: str | None = None, document_type: str | None = None) -> bool:
    """Admin directory filter.

    ``search`` is a case-insensitive substring match on first name, last name,
    document number and booking code; ``document_type`` must match exactly.
    """
    if document_type and guest.document_type != document_type:
        return False
    if not search:
        return True
    needle = search.strip().lower()
    haystack = (
        guest.first_name,
        guest.last_name,
        guest.document_number,
        guest.booking_code,
    )
    return any(needle in (value or "").lower() for value in haystack)


def attach_additional_guests(
    main_guests: Sequence["Guest"],
    additional: Iterable["Guest"],
) -> list[Registration]:
    """Pair each main guest with the additional guests sharing its booking code."""
    by_code: dict[str | None, list["Guest"]] = {}
    for guest in additional:
        by_code.setdefault(guest.booking_code, []).append(guest)
    return [
        Registration(main_guest=main, additional_guests=by_code.get(main.booking_code, []) if main.booking_code else [])
        for main in main_guests
    ]
