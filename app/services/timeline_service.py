"""Timeline service: settings, post admission, visibility and moderation."""

from dataclasses import asdict

from loguru import logger
from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import Forbidden, InvalidInput, NotFound
from app.core.retry import with_db_retry
from app.models.event import Event
from app.models.post import Post
from app.models.timeline import Timeline
from app.models.user import User
from app.schemas.timeline import (
    PostAuthor,
    PostCreate,
    PostDTO,
    TimelineDTO,
    TimelineEventInfo,
    TimelineSettingsDTO,
    TimelineSettingsUpdate,
)
from app.services.base_service import BaseService
from app.services.timeline_rules import (
    TimelineSettings,
    filter_visible_posts,
    is_auto_approved,
    merge_settings,
    settings_from_timeline,
)


MODERATION_ACTIONS = ("approve", "reject")


class TimelineService(BaseService[Timeline]):
    """Per-event timeline operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Timeline)

    async def get_by_event_id(self, event_id: str) -> Timeline | None:
        """Get the timeline of an event. Never creates one."""
        result = await self.db.execute(
            select(Timeline).where(Timeline.event_id == event_id)
        )
        return result.scalar_one_or_none()

    async def require_owned_event(self, event_id: str, identity: Identity) -> Event:
        """Get the event if ``identity`` owns it, raise Forbidden otherwise.

        A missing event is reported as Forbidden too.
        """
        event = await self.db.get(Event, event_id)
        if not event or event.user_id != identity.user_id:
            raise Forbidden("Forbidden")
        return event

    # Settings

    async def get_settings(self, event_id: str) -> TimelineSettingsDTO:
        """Effective settings; defaults when the event has no timeline."""
        timeline = await self.get_by_event_id(event_id)
        return self._settings_dto(settings_from_timeline(timeline))

    async def update_settings(
        self,
        event_id: str,
        identity: Identity,
        data: TimelineSettingsUpdate,
    ) -> TimelineSettingsDTO:
        """Owner-only upsert. Omitted fields are reset to their defaults."""
        await self.require_owned_event(event_id, identity)

        timeline = await self.get_by_event_id(event_id)
        new_settings = merge_settings(
            settings_from_timeline(timeline),
            data.model_dump(),
        )

        if timeline is None:
            timeline = Timeline(event_id=event_id, **asdict(new_settings))
            self.db.add(timeline)
        else:
            for name, value in asdict(new_settings).items():
                setattr(timeline, name, value)

        await self.db.commit()
        logger.info(f"Timeline settings for event {event_id} set to {new_settings}")
        return self._settings_dto(new_settings)

    # Reads

    async def get_timeline(
        self,
        event_id: str,
        identity: Identity,
    ) -> TimelineDTO:
        """Dashboard view of an event's timeline."""
        timeline = await self.get_by_event_id(event_id)
        if not timeline:
            raise NotFound("Timeline not found")

        settings = settings_from_timeline(timeline)
        if not settings.is_active:
            raise Forbidden("Timeline is not active")

        event = await self.db.get(Event, event_id)
        if not event:
            raise NotFound("Event not found")

        return await self._build_timeline_dto(timeline, settings, event, identity)

    async def get_public_timeline(
        self,
        slug: str,
        identity: Identity | None,
    ) -> TimelineDTO:
        """Public race-page view looked up by event slug."""
        event = await with_db_retry(lambda: self._get_event_by_slug(slug))
        if not event:
            logger.info(f"Event not found for slug: {slug}")
            raise NotFound("Event not found")

        timeline = await self.get_by_event_id(event.id)
        if not timeline:
            raise NotFound("Timeline not found")

        settings = settings_from_timeline(timeline)
        if not settings.is_active:
            raise Forbidden("Timeline is not active")

        return await self._build_timeline_dto(timeline, settings, event, identity)

    # Writes

    async def create_post(
        self,
        event_id: str,
        identity: Identity,
        data: PostCreate,
    ) -> PostDTO:
        """Admit a post to the event's timeline."""
        timeline = await self.get_by_event_id(event_id)
        if not timeline:
            raise NotFound("Timeline not found")

        settings = settings_from_timeline(timeline)
        if not settings.is_active:
            raise Forbidden("Timeline is not active")
        if not settings.allow_participant_posting:
            raise Forbidden("Posting is not allowed in this timeline")
        if not data.content or not data.content.strip():
            raise InvalidInput("Post content is required")

        event = await self.db.get(Event, event_id)
        if not event:
            raise NotFound("Event not found")

        post = Post(
            timeline_id=timeline.id,
            user_id=identity.user_id,
            content=data.content,
            media_url=data.media_url,
            media_type=data.media_type,
            is_approved=is_auto_approved(settings, identity.user_id, event.user_id),
        )
        post = await self.create(post)

        state = "approved" if post.is_approved else "pending"
        logger.info(
            f"Post {post.id} by {identity.user_id} admitted to timeline "
            f"{timeline.id} ({state})"
        )

        author = await self.db.get(User, identity.user_id)
        return self._to_post_dto(post, author)

    async def moderate_post(
        self,
        event_id: str,
        post_id: int,
        identity: Identity,
        action: str | None,
    ) -> PostDTO:
        """Owner approve/reject. Reject only clears the approval flag."""
        await self.require_owned_event(event_id, identity)
        if action not in MODERATION_ACTIONS:
            raise InvalidInput("Action must be 'approve' or 'reject'")

        timeline = await self.get_by_event_id(event_id)
        if not timeline:
            raise NotFound("Timeline not found")

        post = await self.db.get(Post, post_id)
        if not post or post.timeline_id != timeline.id:
            raise NotFound("Post not found")

        post.is_approved = action == "approve"
        await self.update(post)
        logger.info(f"Post {post.id} moderation: {action} by {identity.user_id}")

        author = await self.db.get(User, post.user_id)
        return self._to_post_dto(post, author)

    # Helpers

    async def _get_event_by_slug(self, slug: str) -> Event | None:
        result = await self.db.execute(
            select(Event).where(Event.slug == slug)
        )
        return result.scalars().first()

    async def _load_posts(self, timeline_id: int) -> list[tuple[Post, User | None]]:
        """All posts of a timeline with authors, newest first."""
        result = await self.db.execute(
            select(Post, User)
            .outerjoin(User, User.id == Post.user_id)
            .where(Post.timeline_id == timeline_id)
            .order_by(desc(Post.created_at), desc(Post.id))
        )
        return [(post, author) for post, author in result.all()]

    async def _build_timeline_dto(
        self,
        timeline: Timeline,
        settings: TimelineSettings,
        event: Event,
        identity: Identity | None,
    ) -> TimelineDTO:
        rows = await self._load_posts(timeline.id)
        authors = {post.id: author for post, author in rows}
        viewer_id = identity.user_id if identity else None
        visible = filter_visible_posts(
            [post for post, _ in rows], viewer_id, event.user_id
        )

        return TimelineDTO(
            id=timeline.id,
            event_id=event.id,
            event=TimelineEventInfo(
                id=event.id,
                title=event.title,
                description=event.description,
                user_id=event.user_id,
            ),
            posts=[self._to_post_dto(p, authors.get(p.id)) for p in visible],
            **asdict(settings),
        )

    @staticmethod
    def _settings_dto(settings: TimelineSettings) -> TimelineSettingsDTO:
        return TimelineSettingsDTO(**asdict(settings))

    @staticmethod
    def _to_post_dto(post: Post, author: User | None) -> PostDTO:
        """Convert Post model to DTO with author display fields."""
        return PostDTO(
            id=post.id,
            timeline_id=post.timeline_id,
            user_id=post.user_id,
            content=post.content,
            media_url=post.media_url,
            media_type=post.media_type,
            is_approved=post.is_approved,
            created_at=post.created_at,
            author=PostAuthor(username=author.username, role=author.role)
            if author
            else None,
        )
