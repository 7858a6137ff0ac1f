"""Event schemas for API request/response."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import to_iso8601


class EventCreate(BaseModel):
    """Event creation schema."""

    title: str = Field(..., min_length=1)
    description: str | None = None
    location: str | None = None
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")
    series_id: str | None = Field(None, alias="seriesId")

    model_config = {"populate_by_name": True}

    @field_validator("start_date", "end_date")
    @classmethod
    def to_naive_utc(cls, v: datetime | None) -> datetime | None:
        """Stored timestamps are naive UTC."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class EventDTO(BaseModel):
    """Event response schema."""

    id: str
    title: str
    description: str | None = None
    location: str | None = None
    start_date: str | None = Field(None, alias="startDate")
    end_date: str | None = Field(None, alias="endDate")
    slug: str | None = None
    user_id: str = Field(..., alias="userId")
    series_id: str | None = Field(None, alias="seriesId")
    event_number: int | None = Field(None, alias="eventNumber")

    model_config = {"populate_by_name": True}

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, v):
        return to_iso8601(v)
