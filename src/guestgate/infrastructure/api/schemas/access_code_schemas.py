"""Pydantic schemas for access code endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class AccessCodeResponse(BaseModel):
    role: str
    code: str
    updated_at: datetime | None = None
    updated_by: str | None = None

    model_config = {"from_attributes": True}


class AccessCodeUpdateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=255, description="New access code")
