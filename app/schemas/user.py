from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, EmailStr, field_validator
from app.utils.sanitization import sanitize_string


class Identity(BaseModel):
    """The caller, as decoded from a verified token."""
    id: int
    username: str
    email: str


class UserRegister(BaseModel):
    # Presence is checked by the service so a missing field gets the API's own message
    username: str | None = None
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("username", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, v):
        # "" is reported as missing, not as malformed
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UserLogin(BaseModel):
    email: str | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        # Same normalization EmailStr applies at registration; a malformed
        # address is looked up as sent and fails as bad credentials
        if not isinstance(v, str) or not v.strip():
            return v
        try:
            return validate_email(v.strip(), check_deliverability=False).normalized
        except EmailNotValidError:
            return v


class UserResponse(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class UserProfile(UserResponse):
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    user: UserProfile
