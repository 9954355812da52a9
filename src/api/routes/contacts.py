"""
Emergency contact endpoints
===========================

GET    /api/v1/emergency-contacts               -- the caller's contacts, newest first
POST   /api/v1/emergency-contacts               -- add a contact (name and phone required)
PATCH  /api/v1/emergency-contacts/{contact_id}  -- edit a contact
DELETE /api/v1/emergency-contacts/{contact_id}  -- remove a contact

Every call acts on the requester named by ``X-User-Id``.  Contacts owned by
someone else are reported as 404.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db, get_requester_id
from src.api.middleware import limiter
from src.api.schemas import (
    EmergencyContactCreate,
    EmergencyContactResponse,
    EmergencyContactUpdate,
    ErrorResponse,
)
from src.config import settings
from src.domain.errors import NotAuthenticated
from src.infrastructure.repositories import (
    EmergencyContactRepository,
    SqlProviderRepository,
)

router = APIRouter(prefix="/emergency-contacts", tags=["contacts"])

_ERRORS = {401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


async def get_contact_repository(
    user_id: Optional[str] = Depends(get_requester_id),
    db: AsyncSession = Depends(get_db),
) -> EmergencyContactRepository:
    requester = await SqlProviderRepository(db, user_id).get_authenticated_requester()
    if requester is None:
        raise HTTPException(status_code=401, detail=str(NotAuthenticated()))
    return EmergencyContactRepository(db, requester.id)


@router.get(
    "",
    response_model=list[EmergencyContactResponse],
    summary="List the caller's emergency contacts",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def list_contacts(
    request: Request,
    contacts: EmergencyContactRepository = Depends(get_contact_repository),
):
    return await contacts.list_all()


@router.post(
    "",
    status_code=201,
    response_model=EmergencyContactResponse,
    summary="Add an emergency contact",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def add_contact(
    request: Request,
    body: EmergencyContactCreate,
    contacts: EmergencyContactRepository = Depends(get_contact_repository),
):
    return await contacts.create(body.name, body.phone, body.email)


@router.patch(
    "/{contact_id}",
    response_model=EmergencyContactResponse,
    summary="Edit an emergency contact",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def update_contact(
    request: Request,
    contact_id: str,
    body: EmergencyContactUpdate,
    contacts: EmergencyContactRepository = Depends(get_contact_repository),
):
    contact = await contacts.get(contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Emergency contact not found")
    return await contacts.update(contact, **body.model_dump(exclude_none=True))


@router.delete(
    "/{contact_id}",
    status_code=204,
    summary="Remove an emergency contact",
    responses=_ERRORS,
)
@limiter.limit(settings.rate_limit)
async def remove_contact(
    request: Request,
    contact_id: str,
    contacts: EmergencyContactRepository = Depends(get_contact_repository),
):
    contact = await contacts.get(contact_id)
    if not contact:
        raise HTTPException(status_code=404, detail="Emergency contact not found")
    await contacts.delete(contact)
    return Response(status_code=204)
