"""Auth API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    """Request body for administrator login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Request body for administrator self-registration (only when enabled)."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class TokenResponse(BaseModel):
    """JWT access token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Lifetime in seconds")


class AdminResponse(BaseModel):
    """Administrator account (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    is_active: bool
