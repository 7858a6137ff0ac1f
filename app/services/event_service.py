"""Event service for race and competition management."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import Forbidden, NotFound
from app.core.slug import generate_unique_slug
from app.models.event import Event
from app.models.series import Series
from app.schemas.event import EventCreate, EventDTO
from app.services.base_service import BaseService


class EventService(BaseService[Event]):
    """Event service."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Event)

    async def create_event(self, identity: Identity, data: EventCreate) -> EventDTO:
        """Create an event owned by the caller with a unique public slug."""
        event_number = None
        if data.series_id:
            series = await self.db.get(Series, data.series_id)
            if not series:
                raise NotFound("Series not found")
            if series.user_id != identity.user_id:
                raise Forbidden("Cannot add events to another user's series")
            event_number = len(await self._series_events(series.id)) + 1

        slug = await generate_unique_slug(data.title, self._slug_exists)

        event = Event(
            title=data.title,
            description=data.description,
            location=data.location,
            start_date=data.start_date,
            end_date=data.end_date,
            slug=slug or None,
            user_id=identity.user_id,
            series_id=data.series_id,
            event_number=event_number,
        )
        event = await self.create(event)
        logger.info(f"Event {event.id} created by {identity.user_id} (slug={event.slug})")
        return self.to_dto(event)

    async def get_event(self, event_id: str) -> EventDTO:
        event = await self.get_by_id(event_id)
        if not event:
            raise NotFound("Event not found")
        return self.to_dto(event)

    async def list_events(self, identity: Identity) -> list[EventDTO]:
        """Events owned by the caller."""
        result = await self.db.execute(
            select(Event)
            .where(Event.user_id == identity.user_id)
            .order_by(Event.start_date, Event.created_at)
        )
        return [self.to_dto(e) for e in result.scalars().all()]

    async def _slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(select(Event.id).where(Event.slug == slug))
        return result.first() is not None

    async def _series_events(self, series_id: str) -> list[Event]:
        result = await self.db.execute(
            select(Event).where(Event.series_id == series_id)
        )
        return list(result.scalars().all())

    @staticmethod
    def to_dto(event: Event) -> EventDTO:
        """Convert Event model to DTO."""
        return EventDTO(
            id=event.id,
            title=event.title,
            description=event.description,
            location=event.location,
            start_date=event.start_date,
            end_date=event.end_date,
            slug=event.slug,
            user_id=event.user_id,
            series_id=event.series_id,
            event_number=event.event_number,
        )
