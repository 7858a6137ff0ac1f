"""Tests for series and event endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import Delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.event import Event
from app.models.notice import Notice
from app.models.post import Comment, Like, Post
from app.models.series import Series
from app.models.timeline import Timeline, TimelineAccess
from app.models.user import User


async def _count(db_session: AsyncSession, model) -> int:
    return await db_session.scalar(select(func.count()).select_from(model))


@pytest_asyncio.fixture(scope="function")
async def series(
    db_session: AsyncSession, owner: User, participant: User
) -> Series:
    """Series of two events, the first with a populated timeline."""
    series = Series(id="series-wed", title="Wednesday Evening Series", user_id=owner.id)
    db_session.add(series)
    for i in (1, 2):
        db_session.add(Event(
            id=f"wed-{i}",
            title=f"Wednesday {i}",
            slug=f"wednesday-{i}",
            user_id=owner.id,
            series_id=series.id,
            event_number=i,
        ))
    await db_session.flush()

    timeline = Timeline(event_id="wed-1", is_active=True)
    db_session.add(timeline)
    await db_session.flush()

    post = Post(timeline_id=timeline.id, user_id=participant.id, content="race report")
    db_session.add_all([
        post,
        TimelineAccess(timeline_id=timeline.id, user_id=participant.id, role="POSTER"),
        Notice(event_id="wed-1", user_id=owner.id, subject="SI", content="Read them"),
    ])
    await db_session.flush()

    db_session.add_all([
        Comment(post_id=post.id, user_id=owner.id, content="nice"),
        Like(post_id=post.id, user_id=owner.id),
    ])
    await db_session.commit()
    return series


@pytest.mark.asyncio
async def test_create_series_and_events(
    client: AsyncClient,
    owner_headers: dict,
):
    response = await client.post(
        "/api/v2/series",
        json={"title": "Frostbite Series"},
        headers=owner_headers,
    )
    assert response.status_code == 201
    series_id = response.json()["id"]

    for title in ("Frostbite Race", "Frostbite Race"):
        response = await client.post(
            "/api/v2/events",
            json={
                "title": title,
                "seriesId": series_id,
                "startDate": "2026-01-04T11:00:00Z",
            },
            headers=owner_headers,
        )
        assert response.status_code == 201

    response = await client.get(f"/api/v2/series/{series_id}", headers=owner_headers)

    assert response.status_code == 200
    events = response.json()["events"]
    assert [e["eventNumber"] for e in events] == [1, 2]
    assert [e["slug"] for e in events] == ["frostbite-race", "frostbite-race-1"]
    assert events[0]["startDate"] == "2026-01-04T11:00:00.000Z"


@pytest.mark.asyncio
async def test_event_in_other_users_series_forbidden(
    client: AsyncClient,
    series: Series,
    other_headers: dict,
):
    response = await client.post(
        "/api/v2/events",
        json={"title": "Gatecrash", "seriesId": series.id},
        headers=other_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_my_events(
    client: AsyncClient,
    series: Series,
    owner_headers: dict,
    other_headers: dict,
):
    response = await client.get("/api/v2/events", headers=owner_headers)
    assert {e["id"] for e in response.json()} == {"wed-1", "wed-2"}

    response = await client.get("/api/v2/events", headers=other_headers)
    assert response.json() == []


@pytest.mark.asyncio
async def test_delete_series_cascades(
    client: AsyncClient,
    db_session: AsyncSession,
    series: Series,
    owner_headers: dict,
):
    response = await client.delete(f"/api/v2/series/{series.id}", headers=owner_headers)

    assert response.status_code == 200
    assert response.json()["deletedEvents"] == 2

    for model in (Series, Event, Timeline, TimelineAccess, Post, Comment, Like, Notice):
        assert await _count(db_session, model) == 0, model.__name__

    response = await client.get("/api/v2/events/wed-1")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_series_non_owner_forbidden(
    client: AsyncClient,
    db_session: AsyncSession,
    series: Series,
    other_headers: dict,
):
    response = await client.delete(f"/api/v2/series/{series.id}", headers=other_headers)

    assert response.status_code == 403
    assert await _count(db_session, Event) == 2
    assert await _count(db_session, Post) == 1


@pytest.mark.asyncio
async def test_delete_unknown_series(client: AsyncClient, owner_headers: dict):
    response = await client.delete("/api/v2/series/missing", headers=owner_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_series_failure_rolls_back(
    client: AsyncClient,
    db_session: AsyncSession,
    series: Series,
    owner_headers: dict,
    monkeypatch,
):
    """A failed cascade step leaves every row of the series in place."""
    series_id = series.id
    execute = db_session.execute

    async def failing_execute(statement, *args, **kwargs):
        if isinstance(statement, Delete) and statement.table.name == Post.__tablename__:
            raise SQLAlchemyError("disk I/O error")
        return await execute(statement, *args, **kwargs)

    monkeypatch.setattr(db_session, "execute", failing_execute)

    response = await client.delete(f"/api/v2/series/{series_id}", headers=owner_headers)

    assert response.status_code == 500
    data = response.json()
    assert data["Kind"] == "Internal"
    assert data["Message"] == "Failed to delete series"

    monkeypatch.undo()
    assert await _count(db_session, Series) == 1
    assert await _count(db_session, Event) == 2
    for model in (Timeline, TimelineAccess, Post, Comment, Like, Notice):
        assert await _count(db_session, model) == 1, model.__name__
