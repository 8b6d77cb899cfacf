from pydantic import BaseModel, EmailStr, Field, field_validator

from .user import UserProfile

BCRYPT_MAX_BYTES = 72


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=BCRYPT_MAX_BYTES)
    full_name: str = Field(..., min_length=3, max_length=255)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes when UTF-8 encoded")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=1024)


class AuthResponse(BaseModel):
    token: str
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserProfile


class SessionInfo(BaseModel):
    user_id: str
    status: str = "authenticated"


class MessageResponse(BaseModel):
    message: str
