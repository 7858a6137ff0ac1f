"""Series schemas for API request/response."""

from pydantic import BaseModel, Field

from app.schemas.event import EventDTO


class SeriesCreate(BaseModel):
    """Series creation schema."""

    title: str = Field(..., min_length=1)
    description: str | None = None


class SeriesDTO(BaseModel):
    """Series response schema with its events ordered by start date."""

    id: str
    title: str
    description: str | None = None
    user_id: str = Field(..., alias="userId")
    events: list[EventDTO] = []

    model_config = {"populate_by_name": True}
