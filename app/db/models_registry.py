"""
Model registry.

Import all models here to ensure they are registered with SQLAlchemy metadata
before ``Base.metadata.create_all`` runs.
"""

from app.db.base import Base
from app.models.event import Event
from app.models.notice import Notice
from app.models.post import Comment, Like, Post
from app.models.series import Series
from app.models.timeline import Timeline, TimelineAccess
from app.models.user import User

__all__ = [
    "Base",
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
