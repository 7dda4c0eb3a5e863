"""Pydantic v2 response schemas for submissions and the admin directory."""

from pydantic import BaseModel, ConfigDict, Field

from alloggiati.schemas.booking import BookingResponse
from alloggiati.schemas.guest import GuestResponse


class SubmissionGroupResponse(BaseModel):
    """A finalized booking with its guests, main guest first."""

    model_config = ConfigDict(from_attributes=True)

    booking: BookingResponse
    guests: list[GuestResponse]
    submitted_by: str | None = None


class SubmissionListResponse(BaseModel):
    """Submission groups keyed by booking id."""

    items: dict[str, SubmissionGroupResponse]
    total: int


class RegistrationResponse(BaseModel):
    """A finalized main guest and the guests registered with them."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    main_guest: GuestResponse = Field(..., alias="mainGuest")
    additional_guests: list[GuestResponse] = Field(default_factory=list, alias="additionalGuests")


class RegistrationListResponse(BaseModel):
    """Admin directory listing."""

    items: list[RegistrationResponse]
    total: int
