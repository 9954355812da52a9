"""
Data-access interface consumed by the assignment engine.

The engine never talks to a database directly; it receives an object that
satisfies ``ProviderRepository``.  Production uses
``src.infrastructure.repositories.SqlProviderRepository``; tests use an
in-memory fake.

Read methods raise ``ProviderFetchFailed`` and write methods raise
``PersistAssignmentFailed`` on storage errors.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .entities import (
    Coordinate,
    HospitalCandidate,
    RequesterProfile,
    ResponderCandidate,
)
from .enums import EmergencyType


class ProviderRepository(Protocol):
    async def get_authenticated_requester(self) -> Optional[RequesterProfile]:
        ...

    async def fetch_available_hospitals(self) -> list[HospitalCandidate]:
        """Hospitals flagged available that have both latitude and longitude."""
        ...

    async def fetch_on_duty_verified_responders(self) -> list[ResponderCandidate]:
        """Responders that are verified AND on duty, location left raw."""
        ...

    async def persist_hospital_assignment(
        self,
        requester: RequesterProfile,
        coordinate: Coordinate,
        emergency_type: EmergencyType,
        hospital_id: str,
        description: Optional[str] = None,
    ) -> None:
        ...

    async def persist_responder_assignment(
        self,
        requester: RequesterProfile,
        coordinate: Coordinate,
        emergency_type: EmergencyType,
        responder_id: str,
        description: Optional[str] = None,
    ) -> None:
        ...
