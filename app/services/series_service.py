"""Series service, including the ordered series -> events cascade delete."""

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import Forbidden, Internal, NotFound
from app.models.event import Event
from app.models.notice import Notice
from app.models.post import Comment, Like, Post
from app.models.series import Series
from app.models.timeline import Timeline, TimelineAccess
from app.schemas.series import SeriesCreate, SeriesDTO
from app.services.base_service import BaseService
from app.services.event_service import EventService


class SeriesService(BaseService[Series]):
    """Series service."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Series)

    async def create_series(self, identity: Identity, data: SeriesCreate) -> SeriesDTO:
        series = Series(
            title=data.title,
            description=data.description,
            user_id=identity.user_id,
        )
        series = await self.create(series)
        return SeriesDTO(
            id=series.id,
            title=series.title,
            description=series.description,
            user_id=series.user_id,
            events=[],
        )

    async def get_series(self, series_id: str) -> SeriesDTO:
        """Get a series with its events ordered by start date."""
        series = await self.get_by_id(series_id)
        if not series:
            raise NotFound("Series not found")

        result = await self.db.execute(
            select(Event)
            .where(Event.series_id == series_id)
            .order_by(Event.start_date, Event.event_number)
        )
        return SeriesDTO(
            id=series.id,
            title=series.title,
            description=series.description,
            user_id=series.user_id,
            events=[EventService.to_dto(e) for e in result.scalars().all()],
        )

    async def delete_series(self, series_id: str, identity: Identity) -> int:
        """Delete a series and every event in it.

        Phase 1 removes the events together with their timelines, posts,
        engagement, access grants and notices. Phase 2 removes the series.
        Both phases share one transaction: if either fails everything is
        rolled back and Internal is raised. Returns the number of events
        deleted.
        """
        series = await self.get_by_id(series_id)
        if not series:
            raise NotFound("Series not found")
        if series.user_id != identity.user_id:
            raise Forbidden("Cannot delete another user's series")

        event_ids = select(Event.id).where(Event.series_id == series_id)
        timeline_ids = select(Timeline.id).where(Timeline.event_id.in_(event_ids))
        post_ids = select(Post.id).where(Post.timeline_id.in_(timeline_ids))

        phase_one = [
            delete(Like).where(Like.post_id.in_(post_ids)),
            delete(Comment).where(Comment.post_id.in_(post_ids)),
            delete(Post).where(Post.timeline_id.in_(timeline_ids)),
            delete(TimelineAccess).where(TimelineAccess.timeline_id.in_(timeline_ids)),
            delete(Timeline).where(Timeline.event_id.in_(event_ids)),
            delete(Notice).where(Notice.event_id.in_(event_ids)),
        ]

        try:
            deleted_events = await self.db.scalar(
                select(func.count()).select_from(Event).where(Event.series_id == series_id)
            )
            for stmt in phase_one:
                await self.db.execute(
                    stmt.execution_options(synchronize_session="fetch")
                )
            await self.db.execute(
                delete(Event)
                .where(Event.series_id == series_id)
                .execution_options(synchronize_session="fetch")
            )

            await self.db.execute(
                delete(Series)
                .where(Series.id == series_id)
                .execution_options(synchronize_session="fetch")
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Series {series_id} delete rolled back: {e}")
            raise Internal("Failed to delete series")

        logger.info(f"Series {series_id} deleted with {deleted_events} events")
        return deleted_events
