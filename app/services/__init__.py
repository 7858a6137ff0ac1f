"""Service layer for business logic."""

from app.services.engagement_service import EngagementService
from app.services.event_service import EventService
from app.services.notice_service import NoticeService
from app.services.series_service import SeriesService
from app.services.timeline_access_service import TimelineAccessService
from app.services.timeline_service import TimelineService
from app.services.user_service import UserService

__all__ = [
    "EngagementService",
    "EventService",
    "NoticeService",
    "SeriesService",
    "TimelineAccessService",
    "TimelineService",
    "UserService",
]
