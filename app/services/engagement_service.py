"""Likes and comments on timeline posts.

Engagement is independent of a post's approval state: counts include every
like row and comment listing applies no visibility filter.
"""

from loguru import logger
from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import Identity
from app.core.errors import Conflict, InvalidInput, NotFound
from app.models.post import Comment, Like, Post
from app.models.timeline import Timeline
from app.models.user import User
from app.schemas.timeline import CommentDTO, CommentUser, LikeDTO, LikeStatus


class EngagementService:
    """Per-post likes ledger and comment thread."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_post(self, event_id: str, post_id: int) -> Post:
        """Get a post of the event's timeline, raise NotFound otherwise."""
        result = await self.db.execute(
            select(Post)
            .join(Timeline, Timeline.id == Post.timeline_id)
            .where(Post.id == post_id, Timeline.event_id == event_id)
        )
        post = result.scalar_one_or_none()
        if not post:
            raise NotFound("Post not found")
        return post

    # Likes

    async def get_like_status(
        self,
        event_id: str,
        post_id: int,
        identity: Identity | None,
    ) -> LikeStatus:
        """Like count plus whether the caller liked it (False when anonymous)."""
        await self.get_post(event_id, post_id)

        count_result = await self.db.execute(
            select(func.count()).select_from(Like).where(Like.post_id == post_id)
        )
        count = count_result.scalar() or 0

        user_liked = False
        if identity:
            user_liked = await self.db.get(Like, (post_id, identity.user_id)) is not None

        return LikeStatus(count=count, user_liked=user_liked)

    async def add_like(
        self,
        event_id: str,
        post_id: int,
        identity: Identity,
    ) -> LikeDTO:
        """Like a post. A second like by the same user is a Conflict."""
        await self.get_post(event_id, post_id)

        if await self.db.get(Like, (post_id, identity.user_id)) is not None:
            raise Conflict("Post already liked")

        like = Like(post_id=post_id, user_id=identity.user_id)
        self.db.add(like)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("Post already liked")

        await self.db.refresh(like)
        logger.debug(f"Like added: post={post_id} user={identity.user_id}")
        return LikeDTO(
            post_id=like.post_id,
            user_id=like.user_id,
            created_at=like.created_at,
        )

    async def remove_like(
        self,
        event_id: str,
        post_id: int,
        identity: Identity,
    ) -> None:
        """Unlike a post. Removing a missing like is NotFound."""
        await self.get_post(event_id, post_id)

        like = await self.db.get(Like, (post_id, identity.user_id))
        if not like:
            raise NotFound("Like not found")

        await self.db.delete(like)
        await self.db.commit()
        logger.debug(f"Like removed: post={post_id} user={identity.user_id}")

    # Comments

    async def list_comments(self, event_id: str, post_id: int) -> list[CommentDTO]:
        """All comments on a post, newest first."""
        await self.get_post(event_id, post_id)

        result = await self.db.execute(
            select(Comment, User)
            .outerjoin(User, User.id == Comment.user_id)
            .where(Comment.post_id == post_id)
            .order_by(desc(Comment.created_at), desc(Comment.id))
        )
        return [self._to_comment_dto(c, u) for c, u in result.all()]

    async def add_comment(
        self,
        event_id: str,
        post_id: int,
        identity: Identity,
        content: str | None,
    ) -> CommentDTO:
        """Append a comment. Content must be non-empty."""
        if not content or not content.strip():
            raise InvalidInput("Comment content is required")

        await self.get_post(event_id, post_id)

        comment = Comment(post_id=post_id, user_id=identity.user_id, content=content)
        self.db.add(comment)
        await self.db.commit()
        await self.db.refresh(comment)

        author = await self.db.get(User, identity.user_id)
        return self._to_comment_dto(comment, author)

    @staticmethod
    def _to_comment_dto(comment: Comment, user: User | None) -> CommentDTO:
        return CommentDTO(
            id=comment.id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            user=CommentUser(username=user.username) if user else None,
        )
