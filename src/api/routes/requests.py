"""
Dashboard endpoints
===================

GET   /api/v1/sos-requests?hospital_id=...          -- hospital queue, newest first
PATCH /api/v1/sos-requests/{request_id}/status      -- acknowledge / resolve / dismiss
GET   /api/v1/emergency-alerts?responder_id=...     -- responder queue with distance
PATCH /api/v1/emergency-alerts/{alert_id}/status    -- acknowledge / respond / complete

Status changes follow the state machines in ``src.domain.enums``; an
illegal move returns 409.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_db
from src.api.middleware import limiter
from src.api.schemas import (
    AlertStatusUpdate,
    EmergencyAlertResponse,
    ErrorResponse,
    SOSRequestResponse,
    SOSStatusUpdate,
)
from src.config import settings
from src.domain.distance import haversine_km
from src.domain.entities import EmergencyAlert, InvalidStateTransition, SOSRequest
from src.domain.enums import AlertStatus, SOSRequestStatus
from src.domain.location import parse_location
from src.infrastructure.repositories import (
    EmergencyAlertRepository,
    ResponderRepository,
    SOSRequestRepository,
)

router = APIRouter(tags=["requests"])

_NOT_FOUND = {404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}


# ── Hospital side ─────────────────────────────────────────────────────


@router.get(
    "/sos-requests",
    response_model=list[SOSRequestResponse],
    summary="List SOS requests assigned to a hospital",
)
@limiter.limit(settings.rate_limit)
async def list_sos_requests(
    request: Request,
    hospital_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return await SOSRequestRepository(db).list_for_hospital(hospital_id)


@router.patch(
    "/sos-requests/{request_id}/status",
    response_model=SOSRequestResponse,
    summary="Update an SOS request's status",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def update_sos_request_status(
    request: Request,
    request_id: str,
    body: SOSStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    row = await SOSRequestRepository(db).get_by_id(request_id)
    if not row:
        raise HTTPException(status_code=404, detail="SOS request not found")

    entity = SOSRequest(id=row.id, status=SOSRequestStatus(row.status))
    try:
        entity.transition_to(body.status)
    except InvalidStateTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    row.status = entity.status.value
    await db.flush()
    return row


# ── Responder side ────────────────────────────────────────────────────


@router.get(
    "/emergency-alerts",
    response_model=list[EmergencyAlertResponse],
    summary="List emergency alerts assigned to a responder",
    description=(
        "Each alert carries ``distance_km`` from the responder's stored "
        "location, or null when that location cannot be parsed."
    ),
)
@limiter.limit(settings.rate_limit)
async def list_emergency_alerts(
    request: Request,
    responder_id: str = Query(...),
    db: AsyncSession = Depends(get_db),
):
    responder = await ResponderRepository(db).get_by_id(responder_id)
    origin = parse_location(responder.current_location) if responder else None

    alerts = await EmergencyAlertRepository(db).list_for_responder(responder_id)
    result: list[EmergencyAlertResponse] = []
    for a in alerts:
        dto = EmergencyAlertResponse.model_validate(a)
        if origin is not None:
            dto.distance_km = haversine_km(
                origin.latitude, origin.longitude, a.location_lat, a.location_lng
            )
        result.append(dto)
    return result


@router.patch(
    "/emergency-alerts/{alert_id}/status",
    response_model=EmergencyAlertResponse,
    summary="Update an emergency alert's status",
    responses=_NOT_FOUND,
)
@limiter.limit(settings.rate_limit)
async def update_emergency_alert_status(
    request: Request,
    alert_id: str,
    body: AlertStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    row = await EmergencyAlertRepository(db).get_by_id(alert_id)
    if not row:
        raise HTTPException(status_code=404, detail="Emergency alert not found")

    entity = EmergencyAlert(id=row.id, status=AlertStatus(row.status))
    try:
        entity.transition_to(body.status)
    except InvalidStateTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    row.status = entity.status.value
    await db.flush()
    return EmergencyAlertResponse.model_validate(row)
