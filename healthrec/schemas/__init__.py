from .auth import RegisterRequest, LoginRequest, AuthResponse, SessionInfo, MessageResponse
from .health import HealthRecordType, HealthRecordCreate, HealthRecord, HealthStats
from .user import UserRecord, UserProfile

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "SessionInfo",
    "MessageResponse",
    "HealthRecordType",
    "HealthRecordCreate",
    "HealthRecord",
    "HealthStats",
    "UserRecord",
    "UserProfile",
]
