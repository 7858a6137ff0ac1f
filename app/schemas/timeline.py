"""Timeline schemas for API request/response."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.common import to_iso8601


class TimelineSettingsDTO(BaseModel):
    """Effective timeline settings."""

    is_active: bool = Field(..., alias="isActive")
    require_approval: bool = Field(..., alias="requireApproval")
    allow_public_viewing: bool = Field(..., alias="allowPublicViewing")
    allow_participant_posting: bool = Field(..., alias="allowParticipantPosting")

    model_config = {"populate_by_name": True, "from_attributes": True}


class TimelineSettingsUpdate(BaseModel):
    """Timeline settings update. Omitted fields reset to their defaults."""

    is_active: bool | None = Field(None, alias="isActive")
    require_approval: bool | None = Field(None, alias="requireApproval")
    allow_public_viewing: bool | None = Field(None, alias="allowPublicViewing")
    allow_participant_posting: bool | None = Field(
        None, alias="allowParticipantPosting"
    )

    model_config = {"populate_by_name": True}


class PostCreate(BaseModel):
    """Post creation schema. Emptiness is checked by the service."""

    content: str | None = None
    media_url: str | None = Field(None, alias="mediaUrl")
    media_type: str | None = Field(None, alias="mediaType")

    model_config = {"populate_by_name": True}


class PostAuthor(BaseModel):
    """Author display fields attached to a post."""

    username: str | None = None
    role: str | None = None


class PostDTO(BaseModel):
    """Post response schema."""

    id: int
    timeline_id: int = Field(..., alias="timelineId")
    user_id: str = Field(..., alias="userId")
    content: str
    media_url: str | None = Field(None, alias="mediaUrl")
    media_type: str | None = Field(None, alias="mediaType")
    is_approved: bool = Field(..., alias="isApproved")
    created_at: str = Field(..., alias="createdAt")
    author: PostAuthor | None = None

    model_config = {"populate_by_name": True, "from_attributes": True}

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        """Render timestamps in canonical ISO-8601 form."""
        return to_iso8601(v)


class TimelineEventInfo(BaseModel):
    """Event summary embedded in a timeline response."""

    id: str
    title: str
    description: str | None = None
    user_id: str = Field(..., alias="userId")

    model_config = {"populate_by_name": True, "from_attributes": True}


class TimelineDTO(BaseModel):
    """Timeline with the posts visible to the caller."""

    id: int
    event_id: str = Field(..., alias="eventId")
    is_active: bool = Field(..., alias="isActive")
    require_approval: bool = Field(..., alias="requireApproval")
    allow_public_viewing: bool = Field(..., alias="allowPublicViewing")
    allow_participant_posting: bool = Field(..., alias="allowParticipantPosting")
    event: TimelineEventInfo
    posts: list[PostDTO] = []

    model_config = {"populate_by_name": True}


class ModerationAction(BaseModel):
    """Owner moderation request: ``approve`` or ``reject``. Checked by the service."""

    action: str | None = None


class LikeStatus(BaseModel):
    """Like count and whether the caller liked the post."""

    count: int
    user_liked: bool = Field(..., alias="userLiked")

    model_config = {"populate_by_name": True}


class LikeDTO(BaseModel):
    """Like response schema."""

    post_id: int = Field(..., alias="postId")
    user_id: str = Field(..., alias="userId")
    created_at: str = Field(..., alias="createdAt")

    model_config = {"populate_by_name": True, "from_attributes": True}

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        return to_iso8601(v)


class CommentCreate(BaseModel):
    """Comment creation schema. Emptiness is checked by the service."""

    content: str | None = None


class CommentUser(BaseModel):
    username: str | None = None


class CommentDTO(BaseModel):
    """Comment response schema."""

    id: int
    post_id: int = Field(..., alias="postId")
    user_id: str = Field(..., alias="userId")
    content: str
    created_at: str = Field(..., alias="createdAt")
    user: CommentUser | None = None

    model_config = {"populate_by_name": True, "from_attributes": True}

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, v):
        return to_iso8601(v)


class TimelineAccessCreate(BaseModel):
    """Grant a role on a timeline to the user with this email."""

    email: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, description="viewer, poster or admin")


class TimelineAccessDTO(BaseModel):
    """Timeline access grant."""

    id: str
    username: str
    role: str
