"""Timeline (per-event social feed) and access grant models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import utcnow

if TYPE_CHECKING:
    from app.models.event import Event
    from app.models.post import Post


class Timeline(Base):
    """Timeline database model - one per event.

    Setting columns are nullable; readers fall back to the defaults in
    ``app.services.timeline_rules`` for any NULL.
    """

    __tablename__ = "timelines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[str] = mapped_column(ForeignKey("events.id"), unique=True)

    is_active: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    require_approval: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    allow_public_viewing: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    allow_participant_posting: Mapped[bool | None] = mapped_column(
        Boolean, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    event: Mapped["Event"] = relationship(back_populates="timeline")
    posts: Mapped[list["Post"]] = relationship(
        back_populates="timeline",
        cascade="all, delete-orphan",
    )
    access: Mapped[list["TimelineAccess"]] = relationship(
        back_populates="timeline",
        cascade="all, delete-orphan",
    )


class TimelineAccess(Base):
    """Role granted to a user on one timeline - unique (timeline_id, user_id)."""

    __tablename__ = "timeline_access"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timeline_id: Mapped[int] = mapped_column(ForeignKey("timelines.id"))
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"))
    role: Mapped[str] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    timeline: Mapped["Timeline"] = relationship(back_populates="access")

    __table_args__ = (
        UniqueConstraint("timeline_id", "user_id", name="uq_timeline_access_user"),
    )
