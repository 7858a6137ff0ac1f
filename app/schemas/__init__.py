"""Pydantic schemas for API request/response validation."""

from app.schemas.event import EventCreate, EventDTO
from app.schemas.notice import (
    NoticeCreate,
    NoticeDTO,
    NoticeReorder,
    NoticeReorderItem,
    NoticeSequenceUpdate,
)
from app.schemas.series import SeriesCreate, SeriesDTO
from app.schemas.timeline import (
    CommentCreate,
    CommentDTO,
    LikeDTO,
    LikeStatus,
    ModerationAction,
    PostCreate,
    PostDTO,
    TimelineAccessCreate,
    TimelineAccessDTO,
    TimelineDTO,
    TimelineSettingsDTO,
    TimelineSettingsUpdate,
)
from app.schemas.user import ProfileCreate, ProfileDTO, ProfileUpdate

__all__ = [
    "CommentCreate",
    "CommentDTO",
    "EventCreate",
    "EventDTO",
    "LikeDTO",
    "LikeStatus",
    "ModerationAction",
    "NoticeCreate",
    "NoticeDTO",
    "NoticeReorder",
    "NoticeReorderItem",
    "NoticeSequenceUpdate",
    "PostCreate",
    "PostDTO",
    "ProfileCreate",
    "ProfileDTO",
    "ProfileUpdate",
    "SeriesCreate",
    "SeriesDTO",
    "TimelineAccessCreate",
    "TimelineAccessDTO",
    "TimelineDTO",
    "TimelineSettingsDTO",
    "TimelineSettingsUpdate",
]
