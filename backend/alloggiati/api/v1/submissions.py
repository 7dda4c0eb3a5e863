"""Submissions API router: finalized registrations grouped by booking."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.api.deps import get_db, require_access
from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource
from alloggiati.models.guest import Guest
from alloggiati.schemas.guest import GuestResponse, GuestUpdate
from alloggiati.schemas.submission import SubmissionGroupResponse, SubmissionListResponse
from alloggiati.services import submission_service

router = APIRouter(prefix="/api/v1/submissions", tags=["submissions"])


@router.get(
    "",
    response_model=SubmissionListResponse,
    summary="List finalized registrations",
)
async def list_submissions(
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.SUBMISSIONS)),
) -> dict:
    """Own submissions, or everyone's (with submitter names) for administrators."""
    groups = await submission_service.list_submissions(db, ctx)
    return {
        "items": {
            str(booking_id): SubmissionGroupResponse.model_validate(group) for booking_id, group in groups.items()
        },
        "total": len(groups),
    }


@router.put(
    "/guests/{guest_id}",
    response_model=GuestResponse,
    summary="Correct a submitted guest (administrators)",
)
async def update_submitted_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.SUBMISSIONS)),
) -> Guest:
    return await submission_service.update_submitted_guest(db, ctx, guest_id, body)
