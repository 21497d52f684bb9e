"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    """Request body for signup with an access code."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")
    display_name: str | None = Field(None, max_length=255, description="Name shown in the dashboard")
    access_code: str = Field(..., min_length=1, max_length=255, description="Access code of a role")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class AuthResponse(BaseModel):
    """Response for successful signup or login."""

    user_id: str = Field(..., description="Identity ID")
    email: str = Field(..., description="User's email address")
    role: str | None = Field(None, description="Assigned role, or null if none")
    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token expiration time in seconds")


class MeResponse(BaseModel):
    """The current user, their role and the capability flags derived from it."""

    user_id: str
    email: str
    display_name: str | None = None
    role: str | None = None
    is_admin: bool = False
    is_staff: bool = False
    is_reception: bool = False


class ErrorResponse(BaseModel):
    """Body of every domain error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
