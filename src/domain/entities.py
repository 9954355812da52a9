"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``SOSRequest`` and ``EmergencyAlert``: enforces the
  status lifecycles driven by the hospital and responder dashboards.
- Candidates expose ``locate()`` so ranking never inspects raw storage
  formats; a candidate that cannot be located is simply ineligible.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .enums import (
    ALERT_TRANSITIONS,
    SOS_REQUEST_TRANSITIONS,
    AlertStatus,
    AssignmentKind,
    EmergencyType,
    SOSRequestStatus,
)


class InvalidStateTransition(Exception):
    """Raised when a status change violates the request state machine."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RequesterProfile:
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name or 'User'} {self.last_name or ''}".strip()

    @property
    def contact_phone(self) -> str:
        return self.phone or "Not provided"


# ── Candidates ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HospitalCandidate:
    id: str
    coordinate: Optional[Coordinate]

    def locate(self) -> Optional[Coordinate]:
        return self.coordinate


@dataclass(frozen=True)
class ResponderCandidate:
    id: str
    # stored as-is; see ``parse_location`` for the accepted shapes
    raw_location: Optional[str]

    def locate(self) -> Optional[Coordinate]:
        from .location import parse_location

        return parse_location(self.raw_location)


@dataclass(frozen=True)
class RankedCandidate:
    candidate_id: str
    distance_km: float


@dataclass(frozen=True)
class AssignmentDecision:
    kind: AssignmentKind
    candidate_id: Optional[str] = None
    distance_km: Optional[float] = None

    @classmethod
    def hospital(cls, ranked: RankedCandidate) -> AssignmentDecision:
        return cls(AssignmentKind.HOSPITAL, ranked.candidate_id, ranked.distance_km)

    @classmethod
    def responder(cls, ranked: RankedCandidate) -> AssignmentDecision:
        return cls(AssignmentKind.RESPONDER, ranked.candidate_id, ranked.distance_km)

    @classmethod
    def none(cls) -> AssignmentDecision:
        return cls(AssignmentKind.NONE)

    @property
    def assigned(self) -> bool:
        return self.kind is not AssignmentKind.NONE


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class SOSRequest:
    """A request routed to a hospital."""

    id: Optional[str] = None
    user_id: str = ""
    emergency_type: EmergencyType = EmergencyType.MEDICAL
    status: SOSRequestStatus = SOSRequestStatus.PENDING
    assigned_hospital_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def transition_to(self, new_status: SOSRequestStatus) -> None:
        """Move to *new_status* if the transition is legal, else raise."""
        allowed = SOS_REQUEST_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStateTransition(
                f"Cannot transition from {self.status.value} to {new_status.value}"
            )
        self.status = new_status


@dataclass
class EmergencyAlert:
    """An alert routed to an on-duty responder."""

    id: Optional[str] = None
    user_id: str = ""
    type: EmergencyType = EmergencyType.MEDICAL
    status: AlertStatus = AlertStatus.ACTIVE
    responder_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def transition_to(self, new_status: AlertStatus) -> None:
        allowed = ALERT_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStateTransition(
                f"Cannot transition from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
