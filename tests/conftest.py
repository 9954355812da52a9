"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL / Redis.  The production models use only portable
column types, so their metadata is created directly on SQLite.
"""

from typing import AsyncGenerator, Optional

import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.database import Base
from src.infrastructure.models import (
    HospitalProfileModel,
    ProfileModel,
    ResponderDetailsModel,
)
from src.domain.enums import ProfileRole


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DB_URL, echo=False)
TestSessionFactory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


# ── Row builders ──────────────────────────────────────────────────────


def add_user(
    session: AsyncSession,
    first_name: Optional[str] = "Asha",
    last_name: Optional[str] = "Rao",
    phone: Optional[str] = "+91 90000 00000",
) -> ProfileModel:
    user = ProfileModel(
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=ProfileRole.USER.value,
    )
    session.add(user)
    return user


async def add_hospital(
    session: AsyncSession,
    name: str,
    lat: Optional[float],
    lng: Optional[float],
    available: bool = True,
) -> HospitalProfileModel:
    profile = ProfileModel(first_name=name, role=ProfileRole.HOSPITAL.value)
    session.add(profile)
    await session.flush()
    hospital = HospitalProfileModel(
        id=profile.id,
        hospital_name=name,
        latitude=lat,
        longitude=lng,
        is_available=available,
    )
    session.add(hospital)
    await session.flush()
    return hospital


async def add_responder(
    session: AsyncSession,
    location: Optional[str],
    verified: bool = True,
    on_duty: bool = True,
) -> ResponderDetailsModel:
    profile = ProfileModel(first_name="Responder", role=ProfileRole.RESPONDER.value)
    session.add(profile)
    await session.flush()
    responder = ResponderDetailsModel(
        id=profile.id,
        current_location=location,
        is_verified=verified,
        is_on_duty=on_duty,
    )
    session.add(responder)
    await session.flush()
    return responder


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionFactory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
