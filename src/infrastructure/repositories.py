"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  ``SqlProviderRepository`` is the production
implementation of ``src.domain.ports.ProviderRepository``; it converts rows
into domain candidates and ``SQLAlchemyError`` into dispatch errors.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    EmergencyAlertModel,
    EmergencyContactModel,
    HospitalProfileModel,
    ProfileModel,
    ResponderDetailsModel,
    SOSRequestModel,
)
from src.config import settings
from src.domain.entities import (
    Coordinate,
    HospitalCandidate,
    RequesterProfile,
    ResponderCandidate,
)
from src.domain.enums import AlertStatus, EmergencyType, SOSRequestStatus
from src.domain.errors import PersistAssignmentFailed, ProviderFetchFailed


class SqlProviderRepository:
    """Dispatch-time reads and writes on behalf of one requester."""

    def __init__(self, session: AsyncSession, user_id: Optional[str]):
        self.session = session
        self.user_id = user_id

    async def get_authenticated_requester(self) -> Optional[RequesterProfile]:
        if not self.user_id:
            return None
        try:
            profile = await self.session.get(ProfileModel, self.user_id)
        except SQLAlchemyError as exc:
            raise ProviderFetchFailed(f"Failed to fetch profile: {exc}") from exc
        if profile is None:
            return None
        return RequesterProfile(
            id=profile.id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone=profile.phone,
        )

    async def fetch_available_hospitals(self) -> list[HospitalCandidate]:
        try:
            result = await self.session.execute(
                select(HospitalProfileModel)
                .where(HospitalProfileModel.is_available.is_(True))
                .where(HospitalProfileModel.latitude.is_not(None))
                .where(HospitalProfileModel.longitude.is_not(None))
            )
        except SQLAlchemyError as exc:
            raise ProviderFetchFailed(f"Failed to fetch hospitals: {exc}") from exc
        return [
            HospitalCandidate(
                id=h.id,
                coordinate=Coordinate(float(h.latitude), float(h.longitude)),
            )
            for h in result.scalars().all()
        ]

    async def fetch_on_duty_verified_responders(self) -> list[ResponderCandidate]:
        try:
            result = await self.session.execute(
                select(ResponderDetailsModel)
                .where(ResponderDetailsModel.is_verified.is_(True))
                .where(ResponderDetailsModel.is_on_duty.is_(True))
            )
        except SQLAlchemyError as exc:
            raise ProviderFetchFailed(f"Failed to fetch responders: {exc}") from exc
        return [
            ResponderCandidate(id=r.id, raw_location=r.current_location)
            for r in result.scalars().all()
        ]

    async def persist_hospital_assignment(
        self,
        requester: RequesterProfile,
        coordinate: Coordinate,
        emergency_type: EmergencyType,
        hospital_id: str,
        description: Optional[str] = None,
    ) -> None:
        request = SOSRequestModel(
            user_id=requester.id,
            user_name=requester.display_name,
            user_phone=requester.contact_phone,
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            emergency_type=EmergencyType(emergency_type).value,
            description=description or settings.default_description,
            user_address=settings.default_location_label,
            status=SOSRequestStatus.PENDING.value,
            assigned_hospital_id=hospital_id,
        )
        try:
            self.session.add(request)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistAssignmentFailed(
                f"Failed to create SOS request: {exc}"
            ) from exc

    async def persist_responder_assignment(
        self,
        requester: RequesterProfile,
        coordinate: Coordinate,
        emergency_type: EmergencyType,
        responder_id: str,
        description: Optional[str] = None,
    ) -> None:
        alert = EmergencyAlertModel(
            user_id=requester.id,
            type=EmergencyType(emergency_type).value,
            description=description or settings.default_description,
            location_lat=coordinate.latitude,
            location_lng=coordinate.longitude,
            location_description=settings.default_location_label,
            status=AlertStatus.ACTIVE.value,
            responder_id=responder_id,
        )
        try:
            self.session.add(alert)
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistAssignmentFailed(
                f"Failed to create emergency alert: {exc}"
            ) from exc


class SOSRequestRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, request_id: str) -> Optional[SOSRequestModel]:
        return await self.session.get(SOSRequestModel, request_id)

    async def list_for_hospital(self, hospital_id: str) -> list[SOSRequestModel]:
        result = await self.session.execute(
            select(SOSRequestModel)
            .where(SOSRequestModel.assigned_hospital_id == hospital_id)
            .order_by(SOSRequestModel.created_at.desc())
        )
        return list(result.scalars().all())


class EmergencyAlertRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, alert_id: str) -> Optional[EmergencyAlertModel]:
        return await self.session.get(EmergencyAlertModel, alert_id)

    async def list_for_responder(
        self, responder_id: str
    ) -> list[EmergencyAlertModel]:
        result = await self.session.execute(
            select(EmergencyAlertModel)
            .where(EmergencyAlertModel.responder_id == responder_id)
            .order_by(EmergencyAlertModel.created_at.desc())
        )
        return list(result.scalars().all())


class ResponderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, responder_id: str) -> Optional[ResponderDetailsModel]:
        return await self.session.get(ResponderDetailsModel, responder_id)


class EmergencyContactRepository:
    """A user's own emergency contacts; every query is scoped to the owner."""

    def __init__(self, session: AsyncSession, user_id: str):
        self.session = session
        self.user_id = user_id

    async def list_all(self) -> list[EmergencyContactModel]:
        result = await self.session.execute(
            select(EmergencyContactModel)
            .where(EmergencyContactModel.user_id == self.user_id)
            .order_by(EmergencyContactModel.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, contact_id: str) -> Optional[EmergencyContactModel]:
        contact = await self.session.get(EmergencyContactModel, contact_id)
        if contact is None or contact.user_id != self.user_id:
            return None
        return contact

    async def create(
        self, name: str, phone: str, email: Optional[str] = None
    ) -> EmergencyContactModel:
        contact = EmergencyContactModel(
            user_id=self.user_id, name=name, phone=phone, email=email
        )
        self.session.add(contact)
        await self.session.flush()
        await self.session.refresh(contact)
        return contact

    async def update(
        self, contact: EmergencyContactModel, **fields: Optional[str]
    ) -> EmergencyContactModel:
        for key, value in fields.items():
            setattr(contact, key, value)
        await self.session.flush()
        return contact

    async def delete(self, contact: EmergencyContactModel) -> None:
        await self.session.delete(contact)
        await self.session.flush()
