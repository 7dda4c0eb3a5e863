"""Pydantic v2 request/response schemas for guest endpoints.

JSON field names match the persisted column names (``firstName``,
``documentType``...); Python code uses the snake_case attribute names.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from alloggiati.models.guest import DocumentType
from alloggiati.schemas.booking import BookingResponse

EDITABLE_FIELDS = (
    "first_name",
    "last_name",
    "address",
    "document_type",
    "document_number",
    "stay_duration",
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestIn(BaseModel):
    """Identity data captured for every guest."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    document_type: DocumentType = Field(..., alias="documentType")
    document_number: str = Field(..., alias="documentNumber", min_length=1, max_length=50)
    stay_duration: int = Field(..., alias="stayDuration", ge=1)


class AdditionalGuestIn(GuestIn):
    """Additional guests may omit the stay duration; the main guest's is used."""

    stay_duration: int | None = Field(None, alias="stayDuration", ge=1)


class DraftCreate(BaseModel):
    """A whole registration: one main guest plus any additional guests."""

    model_config = ConfigDict(populate_by_name=True)

    booking_id: uuid.UUID
    main_guest: GuestIn = Field(..., alias="mainGuest")
    additional_guests: list[AdditionalGuestIn] = Field(default_factory=list, alias="additionalGuests")


class AdditionalGuestsCreate(BaseModel):
    """Guests appended to an existing draft group."""

    model_config = ConfigDict(populate_by_name=True)

    guests: list[AdditionalGuestIn] = Field(..., min_length=1)


class GuestUpdate(BaseModel):
    """Partial update of the editable fields. All fields optional."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    first_name: str | None = Field(None, alias="firstName", min_length=1, max_length=100)
    last_name: str | None = Field(None, alias="lastName", min_length=1, max_length=100)
    address: str | None = Field(None, min_length=1, max_length=255)
    document_type: DocumentType | None = Field(None, alias="documentType")
    document_number: str | None = Field(None, alias="documentNumber", min_length=1, max_length=50)
    stay_duration: int | None = Field(None, alias="stayDuration", ge=1)

    @model_validator(mode="after")
    def _no_explicit_nulls(self) -> "GuestUpdate":
        """Required columns cannot be cleared."""
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestResponse(BaseModel):
    """Guest row as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    booking_id: uuid.UUID | None = None
    booking_code: str | None = None
    user_id: uuid.UUID
    is_main_guest: bool
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    address: str
    document_type: str = Field(..., alias="documentType")
    document_number: str = Field(..., alias="documentNumber")
    stay_duration: int = Field(..., alias="stayDuration")
    status: str
    created_at: datetime


class GuestDetailResponse(GuestResponse):
    """Guest with its booking, for review and edit views."""

    booking: BookingResponse | None = None


class DraftCreatedResponse(BaseModel):
    """Identifiers of the rows created by a registration, main guest first."""

    booking_id: uuid.UUID
    guest_ids: list[uuid.UUID]


class DraftListResponse(BaseModel):
    """The caller's draft guests, main guests first."""

    items: list[GuestDetailResponse]
    total: int


class FinalizeResponse(BaseModel):
    """Result of finalizing a booking group."""

    booking_id: uuid.UUID
    submitted: int
    message: str
