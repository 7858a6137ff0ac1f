"""Series API endpoints."""

from fastapi import APIRouter, status

from app.core.deps import CurrentIdentityRequired, DBSession
from app.schemas.series import SeriesCreate, SeriesDTO
from app.services.series_service import SeriesService

router = APIRouter()


@router.post("", response_model=SeriesDTO, status_code=status.HTTP_201_CREATED)
async def create_series(
    data: SeriesCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> SeriesDTO:
    """Create an empty series."""
    series_service = SeriesService(db)
    return await series_service.create_series(identity, data)


@router.get("/{series_id}", response_model=SeriesDTO)
async def get_series(
    series_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> SeriesDTO:
    """Get a series with its events."""
    series_service = SeriesService(db)
    return await series_service.get_series(series_id)


@router.delete("/{series_id}")
async def delete_series(
    series_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> dict:
    """Delete a series and all of its events (owner only)."""
    series_service = SeriesService(db)
    deleted = await series_service.delete_series(series_id, identity)
    return {
        "message": "Series and all associated events deleted successfully",
        "deletedEvents": deleted,
    }
