"""
Integration tests for ``SqlProviderRepository`` on SQLite.

Covers the eligibility filters, the persisted record defaults, and the
translation of storage errors into dispatch errors.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from src.domain.assignment import AssignmentEngine
from src.domain.entities import Coordinate, RequesterProfile
from src.domain.enums import AssignmentKind, EmergencyType
from src.domain.errors import (
    NotAuthenticated,
    PersistAssignmentFailed,
    ProviderFetchFailed,
)
from src.infrastructure.models import (
    EmergencyAlertModel,
    EmergencyContactModel,
    SOSRequestModel,
)
from src.infrastructure.repositories import (
    EmergencyContactRepository,
    SqlProviderRepository,
)
from tests.conftest import add_hospital, add_responder, add_user


class TestCandidateQueries:
    @pytest.mark.asyncio
    async def test_only_available_hospitals_with_coordinates(self, db_session):
        ok = await add_hospital(db_session, "Open", 12.91, 77.60)
        await add_hospital(db_session, "Closed", 12.91, 77.60, available=False)
        await add_hospital(db_session, "Unmapped", None, None)
        await add_hospital(db_session, "Half mapped", 12.91, None)

        hospitals = await SqlProviderRepository(db_session, None).fetch_available_hospitals()

        assert [h.id for h in hospitals] == [ok.id]
        assert hospitals[0].coordinate == Coordinate(12.91, 77.60)

    @pytest.mark.asyncio
    async def test_only_verified_on_duty_responders(self, db_session):
        ok = await add_responder(db_session, "(77.6,12.9)")
        broken = await add_responder(db_session, "invalid-format")
        await add_responder(db_session, "(77.6,12.9)", verified=False)
        await add_responder(db_session, "(77.6,12.9)", on_duty=False)

        responders = await SqlProviderRepository(
            db_session, None
        ).fetch_on_duty_verified_responders()

        by_id = {r.id: r.raw_location for r in responders}
        assert by_id == {ok.id: "(77.6,12.9)", broken.id: "invalid-format"}


class TestRequester:
    @pytest.mark.asyncio
    async def test_known_user(self, db_session):
        user = add_user(db_session, first_name="Asha", last_name="Rao", phone="123")
        await db_session.flush()

        requester = await SqlProviderRepository(
            db_session, user.id
        ).get_authenticated_requester()

        assert requester == RequesterProfile(
            id=user.id, first_name="Asha", last_name="Rao", phone="123"
        )

    @pytest.mark.asyncio
    async def test_no_identity(self, db_session):
        assert await SqlProviderRepository(db_session, None).get_authenticated_requester() is None

    @pytest.mark.asyncio
    async def test_unknown_identity(self, db_session):
        repo = SqlProviderRepository(db_session, "does-not-exist")
        assert await repo.get_authenticated_requester() is None


class TestPersistence:
    @pytest.mark.asyncio
    async def test_hospital_assignment_record(self, db_session):
        user = add_user(db_session, first_name="Asha", last_name="Rao", phone="123")
        hospital = await add_hospital(db_session, "Open", 12.91, 77.60)
        repo = SqlProviderRepository(db_session, user.id)

        requester = await repo.get_authenticated_requester()
        await repo.persist_hospital_assignment(
            requester, Coordinate(12.9, 77.6), EmergencyType.SAFETY, hospital.id
        )

        row = (await db_session.execute(select(SOSRequestModel))).scalar_one()
        assert row.user_id == user.id
        assert row.user_name == "Asha Rao"
        assert row.user_phone == "123"
        assert (row.latitude, row.longitude) == (12.9, 77.6)
        assert row.emergency_type == "safety"
        assert row.description == "Emergency SOS request from mobile app."
        assert row.user_address == "Current Location"
        assert row.status == "pending"
        assert row.assigned_hospital_id == hospital.id

    @pytest.mark.asyncio
    async def test_anonymous_profile_defaults(self, db_session):
        user = add_user(db_session, first_name=None, last_name=None, phone=None)
        hospital = await add_hospital(db_session, "Open", 12.91, 77.60)
        repo = SqlProviderRepository(db_session, user.id)

        requester = await repo.get_authenticated_requester()
        await repo.persist_hospital_assignment(
            requester, Coordinate(12.9, 77.6), EmergencyType.MEDICAL, hospital.id
        )

        row = (await db_session.execute(select(SOSRequestModel))).scalar_one()
        assert row.user_name == "User"
        assert row.user_phone == "Not provided"

    @pytest.mark.asyncio
    async def test_responder_assignment_record(self, db_session):
        user = add_user(db_session)
        responder = await add_responder(db_session, "(77.6,12.9)")
        repo = SqlProviderRepository(db_session, user.id)

        requester = await repo.get_authenticated_requester()
        await repo.persist_responder_assignment(
            requester,
            Coordinate(12.9, 77.6),
            EmergencyType.GENERAL,
            responder.id,
            "Smoke in the stairwell",
        )

        row = (await db_session.execute(select(EmergencyAlertModel))).scalar_one()
        assert row.type == "general"
        assert row.description == "Smoke in the stairwell"
        assert (row.location_lat, row.location_lng) == (12.9, 77.6)
        assert row.location_description == "Current Location"
        assert row.status == "active"
        assert row.responder_id == responder.id


class TestErrorTranslation:
    @pytest.mark.asyncio
    async def test_read_error_becomes_fetch_failed(self):
        session = MagicMock()
        session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("db down"))
        )
        repo = SqlProviderRepository(session, "u")

        with pytest.raises(ProviderFetchFailed, match="Failed to fetch hospitals"):
            await repo.fetch_available_hospitals()
        with pytest.raises(ProviderFetchFailed, match="Failed to fetch responders"):
            await repo.fetch_on_duty_verified_responders()

    @pytest.mark.asyncio
    async def test_write_error_becomes_persist_failed(self):
        session = MagicMock()
        session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("constraint"))
        )
        repo = SqlProviderRepository(session, "u")

        with pytest.raises(PersistAssignmentFailed, match="Failed to create SOS request"):
            await repo.persist_hospital_assignment(
                RequesterProfile(id="u"), Coordinate(1, 1), EmergencyType.MEDICAL, "h"
            )
        with pytest.raises(PersistAssignmentFailed, match="Failed to create emergency alert"):
            await repo.persist_responder_assignment(
                RequesterProfile(id="u"), Coordinate(1, 1), EmergencyType.MEDICAL, "r"
            )


class TestEngineOnSql:
    @pytest.mark.asyncio
    async def test_responder_fallback_end_to_end(self, db_session):
        user = add_user(db_session)
        await add_hospital(db_session, "Far", 13.50, 78.00)
        await add_responder(db_session, "invalid-format")
        near = await add_responder(db_session, '{"latitude": 12.95, "longitude": 77.65}')

        decision = await AssignmentEngine(
            SqlProviderRepository(db_session, user.id)
        ).dispatch(Coordinate(12.90, 77.60), EmergencyType.MEDICAL)

        assert decision.kind is AssignmentKind.RESPONDER
        assert decision.candidate_id == near.id
        alert = (await db_session.execute(select(EmergencyAlertModel))).scalar_one()
        assert alert.responder_id == near.id

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(self, db_session):
        await add_hospital(db_session, "Near", 12.91, 77.60)
        engine = AssignmentEngine(SqlProviderRepository(db_session, "ghost"))

        with pytest.raises(NotAuthenticated):
            await engine.dispatch(Coordinate(12.90, 77.60), EmergencyType.MEDICAL)


class TestEmergencyContacts:
    @pytest.mark.asyncio
    async def test_scoped_to_owner(self, db_session):
        owner = add_user(db_session)
        other = add_user(db_session, first_name="Ravi")
        await db_session.flush()

        mine = EmergencyContactRepository(db_session, owner.id)
        theirs = EmergencyContactRepository(db_session, other.id)
        contact = await mine.create("Meera", "+91-9000000001")
        await theirs.create("Arjun", "+91-9000000002", "arjun@example.com")

        assert [c.name for c in await mine.list_all()] == ["Meera"]
        assert await mine.get(contact.id) is contact
        assert await theirs.get(contact.id) is None

    @pytest.mark.asyncio
    async def test_update_and_delete(self, db_session):
        owner = add_user(db_session)
        await db_session.flush()
        contacts = EmergencyContactRepository(db_session, owner.id)

        contact = await contacts.create("Meera", "1")
        await contacts.update(contact, phone="2", email="meera@example.com")
        row = (await db_session.execute(select(EmergencyContactModel))).scalar_one()
        assert (row.name, row.phone, row.email) == ("Meera", "2", "meera@example.com")

        await contacts.delete(contact)
        assert await contacts.list_all() == []
