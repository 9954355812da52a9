"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates (around central Bengaluru):
  - 6 sample users
  - 4 hospitals (one unavailable, one without coordinates)
  - 5 responders covering every stored location shape and duty state
  - 1 SOS request and 1 emergency alert already in progress
  - 3 emergency contacts for the first two users
"""

import asyncio

from sqlalchemy import func, select

from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.models import (
    EmergencyAlertModel,
    EmergencyContactModel,
    HospitalProfileModel,
    ProfileModel,
    ResponderDetailsModel,
    SOSRequestModel,
)
from src.domain.enums import (
    AlertStatus,
    EmergencyType,
    ProfileRole,
    SOSRequestStatus,
)


USERS = [
    {"first_name": "Aarav", "last_name": "Sharma", "phone": "+91 98450 00001"},
    {"first_name": "Priya", "last_name": "Patel", "phone": "+91 98450 00002"},
    {"first_name": "Rohan", "last_name": "Mehta", "phone": None},
    {"first_name": "Sneha", "last_name": None, "phone": "+91 98450 00004"},
    {"first_name": "Vikram", "last_name": "Singh", "phone": "+91 98450 00005"},
    {"first_name": None, "last_name": None, "phone": None},
]

HOSPITALS = [
    {"name": "St. Martha's Hospital", "lat": 12.9655, "lng": 77.5880, "available": True},
    {"name": "Manipal Hospital Old Airport Road", "lat": 12.9592, "lng": 77.6484, "available": True},
    {"name": "Bowring Hospital", "lat": 12.9830, "lng": 77.6040, "available": False},
    {"name": "Community Clinic (unmapped)", "lat": None, "lng": None, "available": True},
]

RESPONDERS = [
    # Every shape the mobile and web clients have written historically
    {"name": ("Karan", "Joshi"), "location": "(77.6100,12.9800)", "verified": True, "on_duty": True},
    {"name": ("Meera", "Nair"), "location": '{"lat": 12.9352, "lng": 77.6245}', "verified": True, "on_duty": True},
    {"name": ("Arjun", "Kumar"), "location": '{"latitude": 13.0358, "longitude": 77.5970}', "verified": True, "on_duty": False},
    {"name": ("Diya", "Iyer"), "location": "invalid-format", "verified": True, "on_duty": True},
    {"name": ("Farhan", "Ali"), "location": "(77.5800,12.9500)", "verified": False, "on_duty": True},
]

# (user index, name, phone, email)
CONTACTS = [
    (0, "Anita Sharma", "+91 98450 10001", "anita@example.com"),
    (0, "Dr. Rao", "+91 98450 10002", None),
    (1, "Kiran Patel", "+91 98450 10003", None),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(select(func.count()).select_from(ProfileModel))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Users ─────────────────────────────────────────────────────
        user_models = []
        for u in USERS:
            m = ProfileModel(
                first_name=u["first_name"],
                last_name=u["last_name"],
                phone=u["phone"],
                role=ProfileRole.USER.value,
            )
            session.add(m)
            user_models.append(m)
        await session.flush()
        print(f"  Created {len(user_models)} users")

        # ── Hospitals ─────────────────────────────────────────────────
        hospital_models = []
        for h in HOSPITALS:
            profile = ProfileModel(first_name=h["name"], role=ProfileRole.HOSPITAL.value)
            session.add(profile)
            await session.flush()
            m = HospitalProfileModel(
                id=profile.id,
                hospital_name=h["name"],
                latitude=h["lat"],
                longitude=h["lng"],
                is_available=h["available"],
            )
            session.add(m)
            hospital_models.append(m)
        await session.flush()
        print(f"  Created {len(hospital_models)} hospitals")

        # ── Responders ────────────────────────────────────────────────
        responder_models = []
        for r in RESPONDERS:
            first, last = r["name"]
            profile = ProfileModel(
                first_name=first, last_name=last, role=ProfileRole.RESPONDER.value
            )
            session.add(profile)
            await session.flush()
            m = ResponderDetailsModel(
                id=profile.id,
                current_location=r["location"],
                is_verified=r["verified"],
                is_on_duty=r["on_duty"],
            )
            session.add(m)
            responder_models.append(m)
        await session.flush()
        print(f"  Created {len(responder_models)} responders")

        # ── Requests already being worked ─────────────────────────────
        session.add(
            SOSRequestModel(
                user_id=user_models[0].id,
                user_name="Aarav Sharma",
                user_phone=user_models[0].phone,
                latitude=12.9700,
                longitude=77.5950,
                emergency_type=EmergencyType.MEDICAL.value,
                description="Emergency SOS request from mobile app.",
                user_address="Current Location",
                status=SOSRequestStatus.ACKNOWLEDGED.value,
                assigned_hospital_id=hospital_models[0].id,
            )
        )
        session.add(
            EmergencyAlertModel(
                user_id=user_models[1].id,
                type=EmergencyType.SAFETY.value,
                description="Emergency SOS request from mobile app.",
                location_lat=12.9300,
                location_lng=77.6200,
                location_description="Current Location",
                status=AlertStatus.ACTIVE.value,
                responder_id=responder_models[1].id,
            )
        )
        await session.flush()
        print("  Created 1 SOS request and 1 emergency alert")

        # ── Emergency contacts ────────────────────────────────────────
        for owner, name, phone, email in CONTACTS:
            session.add(
                EmergencyContactModel(
                    user_id=user_models[owner].id, name=name, phone=phone, email=email
                )
            )
        await session.flush()
        print(f"  Created {len(CONTACTS)} emergency contacts")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
