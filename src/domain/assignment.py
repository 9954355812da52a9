"""
Two-Tier Nearest-Provider Assignment
====================================

1. **Hospital tier**  -- rank available hospitals by great-circle distance
   and keep those within ``HOSPITAL_RADIUS_KM``.  The nearest one wins.
2. **Responder tier** -- only if no hospital qualified: rank verified,
   on-duty responders whose stored location can be parsed.  No radius
   applies; the nearest one wins however far away it is.
3. Otherwise the decision is ``none`` -- a normal outcome, not an error.

Ties on distance go to the candidate that appears first in the list the
repository returned (stable sort, no secondary key).

Complexity
----------
Let H = hospitals, R = responders.

* Hospital tier:   O(H log H)
* Responder tier:  O(R log R)

**Note:** This is a greedy, per-request policy.  Nothing is reserved or
locked, so two concurrent dispatches can both pick the same provider.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol, Union

from .distance import haversine_km
from .entities import (
    AssignmentDecision,
    Coordinate,
    HospitalCandidate,
    RankedCandidate,
    ResponderCandidate,
)
from .enums import AssignmentKind, EmergencyType
from .errors import NotAuthenticated
from .ports import ProviderRepository

logger = logging.getLogger(__name__)

# Changing this is a code change on purpose; it is not exposed in settings.
HOSPITAL_RADIUS_KM = 5.0

NO_PROVIDER_MESSAGE = "No hospital or responder available"


class _Locatable(Protocol):
    id: str

    def locate(self) -> Optional[Coordinate]:
        ...


def rank_by_distance(
    origin: Coordinate, candidates: Iterable[_Locatable]
) -> list[RankedCandidate]:
    """
    Score every locatable candidate and sort ascending by distance.

    Candidates whose ``locate()`` returns ``None`` are dropped.
    ``sorted`` is stable, so equal distances keep their input order.
    """
    ranked: list[RankedCandidate] = []
    for candidate in candidates:
        coordinate = candidate.locate()
        if coordinate is None:
            logger.debug("Skipping candidate %s: no usable location", candidate.id)
            continue
        ranked.append(
            RankedCandidate(
                candidate_id=candidate.id,
                distance_km=haversine_km(
                    origin.latitude,
                    origin.longitude,
                    coordinate.latitude,
                    coordinate.longitude,
                ),
            )
        )
    return sorted(ranked, key=lambda r: r.distance_km)


def nearest_hospital(
    origin: Coordinate,
    hospitals: Iterable[HospitalCandidate],
    radius_km: float = HOSPITAL_RADIUS_KM,
) -> Optional[RankedCandidate]:
    nearby = [r for r in rank_by_distance(origin, hospitals) if r.distance_km <= radius_km]
    return nearby[0] if nearby else None


def nearest_responder(
    origin: Coordinate, responders: Iterable[ResponderCandidate]
) -> Optional[RankedCandidate]:
    ranked = rank_by_distance(origin, responders)
    return ranked[0] if ranked else None


class AssignmentEngine:
    """Runs one dispatch per call against an injected repository."""

    def __init__(self, repository: ProviderRepository):
        self.repository = repository

    async def dispatch(
        self,
        coordinate: Coordinate,
        emergency_type: Union[EmergencyType, str] = EmergencyType.MEDICAL,
        description: Optional[str] = None,
    ) -> AssignmentDecision:
        """
        Assign the emergency at *coordinate* to a hospital or responder.

        Raises ``NotAuthenticated``, ``ProviderFetchFailed`` or
        ``PersistAssignmentFailed``; repository errors are not caught here.
        """
        emergency_type = EmergencyType(emergency_type)

        requester = await self.repository.get_authenticated_requester()
        if requester is None:
            raise NotAuthenticated()

        # 1. Hospital tier
        hospitals = await self.repository.fetch_available_hospitals()
        hospital = nearest_hospital(coordinate, hospitals)
        if hospital is not None:
            await self.repository.persist_hospital_assignment(
                requester, coordinate, emergency_type, hospital.candidate_id, description
            )
            logger.info(
                "Dispatch %s for user %s -> hospital %s (%.2f km)",
                emergency_type.value, requester.id, hospital.candidate_id, hospital.distance_km,
            )
            return AssignmentDecision.hospital(hospital)

        # 2. Responder tier
        responders = await self.repository.fetch_on_duty_verified_responders()
        responder = nearest_responder(coordinate, responders)
        if responder is not None:
            await self.repository.persist_responder_assignment(
                requester, coordinate, emergency_type, responder.candidate_id, description
            )
            logger.info(
                "Dispatch %s for user %s -> responder %s (%.2f km)",
                emergency_type.value, requester.id, responder.candidate_id, responder.distance_km,
            )
            return AssignmentDecision.responder(responder)

        logger.info(
            "Dispatch %s for user %s -> no provider (%d hospitals, %d responders checked)",
            emergency_type.value, requester.id, len(hospitals), len(responders),
        )
        return AssignmentDecision.none()


# ── Boundary shape ────────────────────────────────────────────────────


def to_sos_result(decision: AssignmentDecision) -> dict:
    """Map a decision to the ``{success, type?, error?}`` shape callers consume."""
    if decision.kind is AssignmentKind.NONE:
        return {"success": False, "error": NO_PROVIDER_MESSAGE}
    return {"success": True, "type": decision.kind.value}


def failure_result(exc: Exception) -> dict:
    return {"success": False, "error": str(exc) or "An unexpected error occurred"}
