"""Domain enumerations and state-transition rules."""

import enum


class EmergencyType(str, enum.Enum):
    MEDICAL = "medical"
    SAFETY = "safety"
    GENERAL = "general"


class AssignmentKind(str, enum.Enum):
    HOSPITAL = "hospital"
    RESPONDER = "responder"
    NONE = "none"


class SOSRequestStatus(str, enum.Enum):
    """Status of a hospital-assigned ``sos_requests`` row."""

    PENDING = "pending"
    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class AlertStatus(str, enum.Enum):
    """Status of a responder-assigned ``emergency_alerts`` row."""

    ACTIVE = "active"
    ACKNOWLEDGED = "acknowledged"
    RESPONDING = "responding"
    COMPLETED = "completed"


class ProfileRole(str, enum.Enum):
    USER = "user"
    RESPONDER = "responder"
    HOSPITAL = "hospital"


# State machine: maps current status -> set of valid next statuses
SOS_REQUEST_TRANSITIONS: dict[SOSRequestStatus, set[SOSRequestStatus]] = {
    SOSRequestStatus.PENDING: {
        SOSRequestStatus.ACKNOWLEDGED,
        SOSRequestStatus.DISMISSED,
    },
    SOSRequestStatus.ACTIVE: {
        SOSRequestStatus.ACKNOWLEDGED,
        SOSRequestStatus.DISMISSED,
    },
    SOSRequestStatus.ACKNOWLEDGED: {
        SOSRequestStatus.RESOLVED,
        SOSRequestStatus.DISMISSED,
    },
    SOSRequestStatus.RESOLVED: set(),
    SOSRequestStatus.DISMISSED: set(),
}

ALERT_TRANSITIONS: dict[AlertStatus, set[AlertStatus]] = {
    AlertStatus.ACTIVE: {AlertStatus.ACKNOWLEDGED},
    AlertStatus.ACKNOWLEDGED: {AlertStatus.RESPONDING, AlertStatus.COMPLETED},
    AlertStatus.RESPONDING: {AlertStatus.COMPLETED},
    AlertStatus.COMPLETED: set(),
}
