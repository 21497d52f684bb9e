"""Pydantic schemas for guest endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class GuestCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=255, description="Job title")
    checked_in: bool = False


class GuestUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    company: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=255)
    checked_in: bool | None = None
    checkin_time: datetime | None = None


class SelfCheckInRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    company: str | None = Field(None, max_length=255)
    role: str | None = Field(None, max_length=255)


class GuestImportRequest(BaseModel):
    """Spreadsheet rows keyed by header text."""

    rows: list[dict[str, Any]] = Field(..., min_length=1)


class GuestResponse(BaseModel):
    id: str
    event_id: str
    name: str
    company: str | None = None
    role: str | None = None
    checked_in: bool
    checkin_time: datetime | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class GuestImportResponse(BaseModel):
    imported: int
    skipped: int
    guests: list[GuestResponse]


class ActivityLogResponse(BaseModel):
    id: str
    event_id: str
    user_id: str | None = None
    user_email: str | None = None
    action: str
    details: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
