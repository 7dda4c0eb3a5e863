"""Admin dashboard router: directory of every finalized registration."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from alloggiati.api.deps import get_db, require_access
from alloggiati.auth.context import UserContext
from alloggiati.auth.permissions import Resource
from alloggiati.models.guest import DocumentType
from alloggiati.schemas.submission import RegistrationListResponse, RegistrationResponse
from alloggiati.services import submission_service

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


@router.get(
    "/registrations",
    response_model=RegistrationListResponse,
    summary="Search finalized main guests",
)
async def list_registrations(
    search: str | None = Query(
        None,
        description="Case-insensitive match on first name, last name, document number or booking code",
    ),
    document_type: DocumentType | None = Query(None, alias="documentType", description="Exact document type"),
    db: AsyncSession = Depends(get_db),
    ctx: UserContext = Depends(require_access(Resource.DASHBOARD)),
) -> dict:
    """Return finalized main guests, newest first, each with their additional guests."""
    items = await submission_service.list_all_main_guests(db, ctx, search, document_type)
    return {"items": [RegistrationResponse.model_validate(r) for r in items], "total": len(items)}
