"""Database seeder for demo data."""

import asyncio
from datetime import timedelta

from loguru import logger

from app.db.base import Base
from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.session import async_session_maker, engine
from app.models.event import Event
from app.models.mixins import utcnow
from app.models.notice import Notice
from app.models.post import Comment, Like, Post
from app.models.series import Series
from app.models.timeline import Timeline, TimelineAccess
from app.models.user import User


async def create_tables():
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created")


async def seed_users():
    """Seed club members."""
    users = [
        User(id="organizer", username="harbour-yc", email="races@harbour-yc.example", role="ADMIN"),
        User(id="sailor1", username="jo-laser", email="jo@example.com", role="USER"),
        User(id="sailor2", username="sam-ilca", email="sam@example.com", role="USER"),
    ]

    async with async_session_maker() as db:
        for user in users:
            existing = await db.get(User, user.id)
            if not existing:
                db.add(user)
        await db.commit()
    logger.info(f"Seeded {len(users)} users")


async def seed_series_and_events():
    """Seed a weekly series plus a standalone regatta with an active timeline."""
    start = utcnow().replace(hour=18, minute=0, second=0, microsecond=0)

    async with async_session_maker() as db:
        series = Series(
            id="series-wednesday",
            title="Wednesday Evening Series",
            description="Club handicap racing",
            user_id="organizer",
        )
        db.add(series)

        for i in range(4):
            db.add(Event(
                id=f"wed-{i + 1}",
                title=f"Wednesday Evening Series - Event {i + 1}",
                location="Harbour start line",
                start_date=start + timedelta(days=7 * i),
                end_date=start + timedelta(days=7 * i, hours=2),
                slug=f"wednesday-evening-series-event-{i + 1}",
                user_id="organizer",
                series_id=series.id,
                event_number=i + 1,
            ))

        db.add(Event(
            id="spring-regatta",
            title="Spring Regatta",
            description="Two-day open regatta",
            location="Outer bay",
            start_date=start + timedelta(days=30),
            end_date=start + timedelta(days=31),
            slug="spring-regatta",
            user_id="organizer",
        ))
        await db.commit()
    logger.info("Seeded series and events")


async def seed_timeline():
    """Seed the Spring Regatta timeline with approved and pending posts."""
    now = utcnow()

    async with async_session_maker() as db:
        timeline = Timeline(
            event_id="spring-regatta",
            is_active=True,
            require_approval=True,
            allow_public_viewing=True,
            allow_participant_posting=True,
        )
        db.add(timeline)
        await db.flush()

        db.add(TimelineAccess(timeline_id=timeline.id, user_id="sailor1", role="POSTER"))

        posts = [
            Post(timeline_id=timeline.id, user_id="organizer", is_approved=True,
                 content="Briefing at 09:30 in the clubhouse.", created_at=now - timedelta(hours=3)),
            Post(timeline_id=timeline.id, user_id="sailor1", is_approved=True,
                 content="Great breeze for race 1!", created_at=now - timedelta(hours=2)),
            Post(timeline_id=timeline.id, user_id="sailor2", is_approved=False,
                 content="Anyone have a spare shackle?", created_at=now - timedelta(hours=1)),
        ]
        db.add_all(posts)
        await db.flush()

        db.add(Comment(post_id=posts[1].id, user_id="sailor2", content="Agreed, perfect conditions."))
        db.add(Like(post_id=posts[1].id, user_id="organizer"))
        db.add(Like(post_id=posts[1].id, user_id="sailor2"))

        db.add_all([
            Notice(event_id="spring-regatta", user_id="organizer", subject="Sailing Instructions",
                   content="SIs are available at the race office.", sequence=0),
            Notice(event_id="spring-regatta", user_id="organizer", subject="Amendment 1",
                   content="Race 3 course changed to windward-leeward.", sequence=1),
        ])
        await db.commit()
    logger.info("Seeded timeline, posts and notices")


async def seed_all():
    """Seed all demo data."""
    logger.info("Starting database seeding...")

    await create_tables()
    await seed_users()
    await seed_series_and_events()
    await seed_timeline()

    logger.info("Database seeding completed!")


async def clear_all():
    """Clear all data from tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables cleared and recreated")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "--clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())
