"""Database models."""

from app.models.event import Event
from app.models.notice import Notice
from app.models.post import Comment, Like, Post
from app.models.series import Series
from app.models.timeline import Timeline, TimelineAccess
from app.models.user import User

__all__ = [
    "Comment",
    "Event",
    "Like",
    "Notice",
    "Post",
    "Series",
    "Timeline",
    "TimelineAccess",
    "User",
]
