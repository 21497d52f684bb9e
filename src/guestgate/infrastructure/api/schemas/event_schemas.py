"""Pydantic schemas for event endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class EventFields(BaseModel):
    """Editable event settings."""

    date: str | None = Field(None, max_length=50)
    wifi_ssid: str | None = Field(None, max_length=255)
    wifi_pass: str | None = Field(None, max_length=255)
    wifi_img_url: str | None = Field(None, max_length=1024)
    photo_url: str | None = Field(None, max_length=1024)
    photo_img_url: str | None = Field(None, max_length=1024)
    event_logo_url: str | None = Field(None, max_length=1024)
    primary_color: str | None = Field(None, pattern=HEX_COLOR)
    secondary_color: str | None = Field(None, pattern=HEX_COLOR)
    tertiary_color: str | None = Field(None, pattern=HEX_COLOR)
    event_logo_size: int | None = Field(None, ge=50, le=600)


class EventCreateRequest(EventFields):
    name: str = Field(..., min_length=1, max_length=255)


class EventUpdateRequest(EventFields):
    name: str | None = Field(None, min_length=1, max_length=255)


class PublicEventResponse(BaseModel):
    """What the Wi-Fi display, totem and self check-in screens may show."""

    id: str
    name: str
    date: str | None = None
    wifi_ssid: str | None = None
    wifi_pass: str | None = None
    wifi_img_url: str | None = None
    photo_url: str | None = None
    photo_img_url: str | None = None
    event_logo_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    tertiary_color: str | None = None
    event_logo_size: int | None = None

    model_config = {"from_attributes": True}


class EventResponse(PublicEventResponse):
    user_id: str
    created_at: datetime | None = None
