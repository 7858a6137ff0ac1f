"""Timeline access grants (per-timeline roles)."""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import NotFound
from app.models.timeline import Timeline, TimelineAccess
from app.models.user import User
from app.schemas.timeline import TimelineAccessCreate, TimelineAccessDTO
from app.services.base_service import BaseService
from app.services.timeline_service import TimelineService


class TimelineAccessService(BaseService[TimelineAccess]):
    """Owner-managed role grants on an event's timeline."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, TimelineAccess)
        self.timeline_service = TimelineService(db)

    async def list_access(
        self, event_id: str, identity: Identity
    ) -> list[TimelineAccessDTO]:
        """List grants on the event's timeline (empty if it has none)."""
        await self.timeline_service.require_owned_event(event_id, identity)

        timeline = await self.timeline_service.get_by_event_id(event_id)
        if not timeline:
            return []

        result = await self.db.execute(
            select(TimelineAccess, User)
            .join(User, User.id == TimelineAccess.user_id)
            .where(TimelineAccess.timeline_id == timeline.id)
            .order_by(User.username)
        )
        return [self._to_dto(access, user) for access, user in result.all()]

    async def grant_access(
        self,
        event_id: str,
        identity: Identity,
        data: TimelineAccessCreate,
    ) -> TimelineAccessDTO:
        """Grant ``data.role`` to the user with ``data.email``.

        Creates the timeline when missing (active, other settings default)
        and overwrites any existing grant for that user.
        """
        await self.timeline_service.require_owned_event(event_id, identity)

        result = await self.db.execute(select(User).where(User.email == data.email))
        target = result.scalar_one_or_none()
        if not target:
            raise NotFound("User not found")

        timeline = await self.timeline_service.get_by_event_id(event_id)
        if timeline is None:
            timeline = Timeline(event_id=event_id, is_active=True)
            self.db.add(timeline)
            await self.db.flush()
            logger.info(f"Timeline created for event {event_id} on first access grant")

        access = await self._get_access(timeline.id, target.id)
        role = data.role.upper()
        if access:
            access.role = role
        else:
            access = TimelineAccess(
                timeline_id=timeline.id,
                user_id=target.id,
                role=role,
            )
            self.db.add(access)

        await self.db.commit()
        logger.info(f"Timeline {timeline.id}: granted {role} to {target.id}")
        return self._to_dto(access, target)

    async def revoke_access(
        self,
        event_id: str,
        identity: Identity,
        user_id: str,
    ) -> None:
        """Remove a user's grant."""
        await self.timeline_service.require_owned_event(event_id, identity)

        timeline = await self.timeline_service.get_by_event_id(event_id)
        if not timeline:
            raise NotFound("Timeline not found")

        access = await self._get_access(timeline.id, user_id)
        if not access:
            raise NotFound("Access not found")

        await self.delete(access)
        logger.info(f"Timeline {timeline.id}: revoked access of {user_id}")

    async def _get_access(self, timeline_id: int, user_id: str) -> TimelineAccess | None:
        result = await self.db.execute(
            select(TimelineAccess).where(
                TimelineAccess.timeline_id == timeline_id,
                TimelineAccess.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_dto(access: TimelineAccess, user: User) -> TimelineAccessDTO:
        return TimelineAccessDTO(
            id=user.id,
            username=user.username,
            role=access.role.lower(),
        )
