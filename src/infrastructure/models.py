"""
SQLAlchemy ORM models.

Tables
------
* ``profiles``           -- every account (user, responder, hospital staff)
* ``hospital_profiles``  -- hospitals with fixed coordinates and availability
* ``responder_details``  -- responders; ``current_location`` is raw text
* ``sos_requests``       -- emergencies routed to a hospital
* ``emergency_alerts``   -- emergencies routed to a responder
* ``emergency_contacts`` -- people a user wants to reach in an emergency

Indexes
-------
* **B-Tree** on availability / duty flags used by the dispatch queries and
  on assignee + status used by the dashboards, and on owner + creation
  time for the emergency contact list.
"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
    func,
)

from .database import Base
from src.domain.enums import AlertStatus, ProfileRole, SOSRequestStatus


def _uuid() -> str:
    return str(uuid.uuid4())


class ProfileModel(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_uuid)
    first_name = Column(String(120), nullable=True)
    last_name = Column(String(120), nullable=True)
    phone = Column(String(32), nullable=True)
    role = Column(String(20), default=ProfileRole.USER.value, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class HospitalProfileModel(Base):
    __tablename__ = "hospital_profiles"

    id = Column(String(36), ForeignKey("profiles.id"), primary_key=True)
    hospital_name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_hospitals_available", "is_available"),)


class ResponderDetailsModel(Base):
    __tablename__ = "responder_details"

    id = Column(String(36), ForeignKey("profiles.id"), primary_key=True)
    # Written by several clients: JSON text or PostgreSQL point text "(lng,lat)"
    current_location = Column(Text, nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_on_duty = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_responders_duty", "is_verified", "is_on_duty"),
    )


class SOSRequestModel(Base):
    __tablename__ = "sos_requests"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    user_name = Column(String(255), nullable=False)
    user_phone = Column(String(32), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    emergency_type = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    user_address = Column(String(255), nullable=True)
    status = Column(
        String(20), default=SOSRequestStatus.PENDING.value, nullable=False
    )
    assigned_hospital_id = Column(
        String(36), ForeignKey("hospital_profiles.id"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_sos_hospital_status", "assigned_hospital_id", "status"),
        Index("idx_sos_user", "user_id"),
    )


class EmergencyAlertModel(Base):
    __tablename__ = "emergency_alerts"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    type = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    location_lat = Column(Float, nullable=False)
    location_lng = Column(Float, nullable=False)
    location_description = Column(String(255), nullable=True)
    status = Column(String(20), default=AlertStatus.ACTIVE.value, nullable=False)
    responder_id = Column(
        String(36), ForeignKey("responder_details.id"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_alerts_responder_status", "responder_id", "status"),
        Index("idx_alerts_user", "user_id"),
    )


class EmergencyContactModel(Base):
    __tablename__ = "emergency_contacts"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (Index("idx_contacts_user", "user_id", "created_at"),)
