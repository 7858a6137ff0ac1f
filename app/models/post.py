"""Timeline posts and their engagement (comments, likes)."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import utcnow
from app.models.user import User

if TYPE_CHECKING:
    from app.models.timeline import Timeline


class Post(Base):
    """Timeline post database model."""

    __tablename__ = "timeline_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timeline_id: Mapped[int] = mapped_column(ForeignKey("timelines.id"), index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"))

    content: Mapped[str] = mapped_column(Text)
    media_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    media_type: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # False for both "pending" and "rejected"
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    timeline: Mapped["Timeline"] = relationship(back_populates="posts")
    author: Mapped[User] = relationship()
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )
    likes: Mapped[list["Like"]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_timeline_posts_timeline_created", "timeline_id", "created_at"),
    )


class Comment(Base):
    """Comment on a timeline post. Append-only, not moderated."""

    __tablename__ = "timeline_post_comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("timeline_posts.id"), index=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    post: Mapped[Post] = relationship(back_populates="comments")
    user: Mapped[User] = relationship()


class Like(Base):
    """Like database model - composite key (post_id, user_id)."""

    __tablename__ = "timeline_post_likes"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("timeline_posts.id"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    post: Mapped[Post] = relationship(back_populates="likes")
