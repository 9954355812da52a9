"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.enums import (
    AlertStatus,
    AssignmentKind,
    EmergencyType,
    SOSRequestStatus,
)


# ── Requests ──────────────────────────────────────────────────────────


class SOSCreateRequest(BaseModel):
    emergency_type: EmergencyType = EmergencyType.MEDICAL
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class EmergencyCreateRequest(SOSCreateRequest):
    description: Optional[str] = Field(None, max_length=2000)


class SOSStatusUpdate(BaseModel):
    status: SOSRequestStatus


class AlertStatusUpdate(BaseModel):
    status: AlertStatus


class EmergencyContactCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=32)
    email: Optional[str] = Field(None, max_length=255)


class EmergencyContactUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, min_length=1, max_length=32)
    email: Optional[str] = Field(None, max_length=255)


# ── Responses ─────────────────────────────────────────────────────────


class SOSResult(BaseModel):
    success: bool
    type: Optional[AssignmentKind] = None
    error: Optional[str] = None


class SOSRequestResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    user_phone: str
    latitude: float
    longitude: float
    emergency_type: EmergencyType
    description: Optional[str] = None
    user_address: Optional[str] = None
    status: SOSRequestStatus
    assigned_hospital_id: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmergencyAlertResponse(BaseModel):
    id: str
    user_id: str
    type: EmergencyType
    description: Optional[str] = None
    location_lat: float
    location_lng: float
    location_description: Optional[str] = None
    status: AlertStatus
    responder_id: Optional[str] = None
    created_at: Optional[datetime] = None
    distance_km: Optional[float] = Field(
        None, description="Distance from the responder's current location."
    )

    model_config = {"from_attributes": True}


class EmergencyContactResponse(BaseModel):
    id: str
    name: str
    phone: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
