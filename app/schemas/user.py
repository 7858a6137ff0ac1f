"""User profile schemas."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import to_iso8601


class ProfileCreate(BaseModel):
    """Profile creation schema. The username is slugified."""

    username: str = Field(..., min_length=1)
    email: str | None = None
    bio: str | None = None


class ProfileUpdate(BaseModel):
    """Profile update schema."""

    username: str | None = Field(None, min_length=1)
    bio: str | None = None


class ProfileDTO(BaseModel):
    """Profile response schema."""

    id: str
    username: str
    email: str | None = None
    role: str
    bio: str | None = None
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True}

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        return to_iso8601(v)
