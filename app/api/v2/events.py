"""Event API endpoints."""

from fastapi import APIRouter, status

from app.core.deps import CurrentIdentityRequired, DBSession
from app.schemas.event import EventCreate, EventDTO
from app.services.event_service import EventService

router = APIRouter()


@router.post("", response_model=EventDTO, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> EventDTO:
    """
    Create an event owned by the caller.

    - **title**: Event title, also the source of its public slug
    - **seriesId**: Optional series (must be the caller's)
    """
    event_service = EventService(db)
    return await event_service.create_event(identity, data)


@router.get("", response_model=list[EventDTO])
async def get_my_events(
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> list[EventDTO]:
    """Get the caller's events."""
    event_service = EventService(db)
    return await event_service.list_events(identity)


@router.get("/{event_id}", response_model=EventDTO)
async def get_event(
    event_id: str,
    db: DBSession,
) -> EventDTO:
    """Get event by ID."""
    event_service = EventService(db)
    return await event_service.get_event(event_id)
