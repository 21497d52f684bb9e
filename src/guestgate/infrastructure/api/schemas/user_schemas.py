"""Pydantic schemas for user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserSummaryResponse(BaseModel):
    user_id: str
    email: str | None = None
    display_name: str | None = None
    role: str | None = None
    created_at: datetime | None = None


class ProfileResponse(BaseModel):
    user_id: str
    email: str | None = None
    display_name: str | None = None

    model_config = {"from_attributes": True}


class ProfileUpdateRequest(BaseModel):
    display_name: str | None = Field(None, max_length=255)


class PasswordResetRequest(BaseModel):
    password: str = Field(..., min_length=1, description="New password for the user")
