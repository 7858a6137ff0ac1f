"""Notice board service."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import Forbidden, Internal, NotFound
from app.models.event import Event
from app.models.notice import Notice
from app.schemas.notice import NoticeCreate, NoticeDTO, NoticeReorderItem
from app.services.base_service import BaseService


class NoticeService(BaseService[Notice]):
    """Notices attached to events, ordered by ``sequence``."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Notice)

    async def list_notices(self, event_id: str) -> list[NoticeDTO]:
        result = await self.db.execute(
            select(Notice)
            .where(Notice.event_id == event_id)
            .order_by(Notice.sequence, Notice.id)
        )
        return [self._to_dto(n) for n in result.scalars().all()]

    async def create_notice(self, identity: Identity, data: NoticeCreate) -> NoticeDTO:
        event = await self.db.get(Event, data.event_id)
        if not event:
            raise NotFound("Event not found")
        if event.user_id != identity.user_id:
            raise Forbidden("Only the event owner can post notices")

        notice = Notice(
            event_id=data.event_id,
            user_id=identity.user_id,
            subject=data.subject,
            content=data.content,
            sequence=data.sequence,
        )
        notice = await self.create(notice)
        return self._to_dto(notice)

    async def update_sequence(
        self, notice_id: int, identity: Identity, sequence: int
    ) -> NoticeDTO:
        notice = await self._get_owned(notice_id, identity)
        notice.sequence = sequence
        await self.update(notice)
        return self._to_dto(notice)

    async def delete_notice(self, notice_id: int, identity: Identity) -> None:
        notice = await self._get_owned(notice_id, identity)
        await self.delete(notice)

    async def reorder(
        self, identity: Identity, items: list[NoticeReorderItem]
    ) -> int:
        """Apply a batch of sequence changes as one unit.

        Every notice is looked up and checked before any is modified, and all
        changes go out in a single commit; any failure leaves every sequence
        as it was.
        """
        notices = []
        for item in items:
            notices.append((await self._get_owned(item.id, identity), item.sequence))

        for notice, sequence in notices:
            notice.sequence = sequence

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Notice reorder rolled back: {e}")
            raise Internal("Failed to reorder notices")

        logger.info(f"Reordered {len(notices)} notices for {identity.user_id}")
        return len(notices)

    async def _get_owned(self, notice_id: int, identity: Identity) -> Notice:
        """Get a notice whose event the caller owns."""
        result = await self.db.execute(
            select(Notice, Event.user_id)
            .join(Event, Event.id == Notice.event_id)
            .where(Notice.id == notice_id)
        )
        row = result.first()
        if not row:
            raise NotFound(f"Notice {notice_id} not found")

        notice, owner_id = row
        if owner_id != identity.user_id:
            raise Forbidden("Only the event owner can change notices")
        return notice

    @staticmethod
    def _to_dto(notice: Notice) -> NoticeDTO:
        return NoticeDTO(
            id=notice.id,
            event_id=notice.event_id,
            user_id=notice.user_id,
            subject=notice.subject,
            content=notice.content,
            sequence=notice.sequence,
            created_at=notice.created_at,
        )
