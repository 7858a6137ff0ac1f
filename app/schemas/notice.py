"""Notice board schemas."""

from pydantic import BaseModel, Field, StrictInt, field_validator

from app.schemas.common import to_iso8601


class NoticeCreate(BaseModel):
    """Notice creation schema."""

    event_id: str = Field(..., alias="eventId", min_length=1)
    subject: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    sequence: int = 0

    model_config = {"populate_by_name": True}


class NoticeDTO(BaseModel):
    """Notice response schema."""

    id: int
    event_id: str = Field(..., alias="eventId")
    user_id: str = Field(..., alias="userId")
    subject: str
    content: str
    sequence: int
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        return to_iso8601(v)


class NoticeSequenceUpdate(BaseModel):
    """Single notice position update."""

    sequence: StrictInt


class NoticeReorderItem(BaseModel):
    id: int
    sequence: StrictInt


class NoticeReorder(BaseModel):
    """Batch reorder, applied all-or-nothing."""

    notices: list[NoticeReorderItem]
