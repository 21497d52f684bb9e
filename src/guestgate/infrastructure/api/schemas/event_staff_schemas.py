"""Pydantic schemas for event staff endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class EventStaffCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    role: str | None = Field(None, max_length=255, description="Function at the event")
    checked_in: bool = False


class EventStaffUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    role: str | None = Field(None, max_length=255)
    checked_in: bool | None = None
    checkin_time: datetime | None = None


class EventStaffResponse(BaseModel):
    id: str
    event_id: str
    name: str
    role: str | None = None
    checked_in: bool
    checkin_time: datetime | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
