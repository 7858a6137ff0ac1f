"""Notice board API endpoints."""

from fastapi import APIRouter, Query

from app.core.deps import CurrentIdentityRequired, DBSession
from app.schemas.notice import (
    NoticeCreate,
    NoticeDTO,
    NoticeReorder,
    NoticeSequenceUpdate,
)
from app.services.notice_service import NoticeService

router = APIRouter()


@router.get("", response_model=list[NoticeDTO])
async def get_notices(
    db: DBSession,
    identity: CurrentIdentityRequired,
    event_id: str = Query(..., alias="eventId", min_length=1),
) -> list[NoticeDTO]:
    """Get an event's notices ordered by sequence."""
    notice_service = NoticeService(db)
    return await notice_service.list_notices(event_id)


@router.post("", response_model=NoticeDTO)
async def create_notice(
    data: NoticeCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> NoticeDTO:
    """
    Create a notice (event owner only).

    - **eventId**: Event ID
    - **subject**: Notice subject
    - **content**: Notice body
    - **sequence**: Position on the board
    """
    notice_service = NoticeService(db)
    return await notice_service.create_notice(identity, data)


@router.post("/reorder")
async def reorder_notices(
    data: NoticeReorder,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> dict:
    """Apply a batch of sequence changes, all or nothing."""
    notice_service = NoticeService(db)
    await notice_service.reorder(identity, data.notices)
    return {"message": "Notices reordered successfully"}


@router.put("/{notice_id}", response_model=NoticeDTO)
async def update_notice_sequence(
    notice_id: int,
    data: NoticeSequenceUpdate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> NoticeDTO:
    """Move a single notice."""
    notice_service = NoticeService(db)
    return await notice_service.update_sequence(notice_id, identity, data.sequence)


@router.delete("/{notice_id}")
async def delete_notice(
    notice_id: int,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> dict:
    """Delete a notice."""
    notice_service = NoticeService(db)
    await notice_service.delete_notice(notice_id, identity)
    return {"message": "Notice deleted successfully"}
