"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.authorization import Role


class SessionPayload(BaseModel):
    """Identity carried inside the signed session token."""

    user_id: int
    email: str
    role: Role


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, description="Account email")
    password: str = Field(..., max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """Self-registration with a Superadmin-issued token."""

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    name: str = Field(..., max_length=255)
    token: str = Field(..., max_length=64, description="10-character registration token")


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=255)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., max_length=128)
    new_password: str = Field(..., alias="newPassword", max_length=128)

    model_config = ConfigDict(populate_by_name=True)


class UserOut(BaseModel):
    """Account details returned to the client (no password or reset fields)."""

    id: int
    email: str
    name: str
    role: Role
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    user: UserOut


class LoginResponse(BaseModel):
    message: str = "Login successful"
    user: UserOut


class RegisterResponse(BaseModel):
    message: str = "Registration successful"
    user: UserOut


class MessageResponse(BaseModel):
    message: str
