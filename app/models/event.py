"""Event model for races and competitions."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import utcnow

if TYPE_CHECKING:
    from app.models.notice import Notice
    from app.models.series import Series
    from app.models.timeline import Timeline


class Event(Base):
    """Event database model."""

    __tablename__ = "events"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Public lookup key for the race page
    slug: Mapped[str | None] = mapped_column(
        String(255), unique=True, nullable=True, index=True
    )

    # Owner / organizer identity
    user_id: Mapped[str] = mapped_column(String(255), index=True)

    series_id: Mapped[str | None] = mapped_column(
        ForeignKey("series.id"), nullable=True, index=True
    )
    event_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    series: Mapped["Series | None"] = relationship(back_populates="events")
    timeline: Mapped["Timeline | None"] = relationship(
        back_populates="event",
        uselist=False,
        cascade="all, delete-orphan",
    )
    notices: Mapped[list["Notice"]] = relationship(
        back_populates="event",
        cascade="all, delete-orphan",
    )
