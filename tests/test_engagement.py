"""Tests for likes and comments."""

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.models.timeline import Timeline


@pytest_asyncio.fixture(scope="function")
async def pending_post(
    db_session: AsyncSession, timeline: Timeline, participant
) -> Post:
    post = Post(
        timeline_id=timeline.id,
        user_id=participant.id,
        content="Anyone have a spare shackle?",
        is_approved=False,
    )
    db_session.add(post)
    await db_session.commit()
    await db_session.refresh(post)
    return post


def _likes_url(post: Post, event_id: str) -> str:
    return f"/api/v2/timeline/{event_id}/posts/{post.id}/likes"


def _comments_url(post: Post, event_id: str) -> str:
    return f"/api/v2/timeline/{event_id}/posts/{post.id}/comments"


@pytest.mark.asyncio
async def test_like_status_anonymous(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
):
    response = await client.get(_likes_url(pending_post, timeline.event_id))

    assert response.status_code == 200
    assert response.json() == {"count": 0, "userLiked": False}


@pytest.mark.asyncio
async def test_like_and_status(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    owner_headers: dict,
    other_headers: dict,
):
    url = _likes_url(pending_post, timeline.event_id)

    response = await client.post(url, headers=other_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["postId"] == pending_post.id
    assert data["userId"] == "spectator"

    as_liker = await client.get(url, headers=other_headers)
    as_owner = await client.get(url, headers=owner_headers)
    anonymous = await client.get(url)

    assert as_liker.json() == {"count": 1, "userLiked": True}
    assert as_owner.json() == {"count": 1, "userLiked": False}
    assert anonymous.json() == {"count": 1, "userLiked": False}


@pytest.mark.asyncio
async def test_like_twice_conflict(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    other_headers: dict,
):
    url = _likes_url(pending_post, timeline.event_id)

    await client.post(url, headers=other_headers)
    response = await client.post(url, headers=other_headers)

    assert response.status_code == 409
    assert response.json()["Kind"] == "Conflict"

    status = await client.get(url, headers=other_headers)
    assert status.json()["count"] == 1


@pytest.mark.asyncio
async def test_unlike_then_like_again(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    other_headers: dict,
):
    url = _likes_url(pending_post, timeline.event_id)

    await client.post(url, headers=other_headers)
    response = await client.delete(url, headers=other_headers)
    assert response.status_code == 200

    status = await client.get(url, headers=other_headers)
    assert status.json() == {"count": 0, "userLiked": False}

    response = await client.post(url, headers=other_headers)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unlike_without_like_not_found(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    other_headers: dict,
):
    response = await client.delete(
        _likes_url(pending_post, timeline.event_id), headers=other_headers
    )

    assert response.status_code == 404
    assert response.json()["Message"] == "Like not found"


@pytest.mark.asyncio
async def test_like_requires_authentication(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
):
    response = await client.post(_likes_url(pending_post, timeline.event_id))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_like_post_of_other_event_not_found(
    client: AsyncClient,
    pending_post: Post,
    other_headers: dict,
):
    response = await client.post(
        _likes_url(pending_post, "another-event"), headers=other_headers
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_comments_on_pending_post(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    owner_headers: dict,
    other_headers: dict,
):
    """Comments are listed regardless of the post's approval, newest first."""
    url = _comments_url(pending_post, timeline.event_id)

    first = await client.post(url, json={"content": "first"}, headers=other_headers)
    second = await client.post(url, json={"content": "second"}, headers=owner_headers)

    assert first.status_code == 200
    assert first.json()["user"] == {"username": "sam-ilca"}
    assert second.json()["userId"] == "owner"

    response = await client.get(url)

    assert response.status_code == 200
    assert [c["content"] for c in response.json()] == ["second", "first"]


@pytest.mark.asyncio
async def test_empty_comment_invalid(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
    other_headers: dict,
):
    url = _comments_url(pending_post, timeline.event_id)

    for body in ({}, {"content": ""}, {"content": "   "}):
        response = await client.post(url, json=body, headers=other_headers)
        assert response.status_code == 400
        assert response.json()["Kind"] == "InvalidInput"

    response = await client.get(url)
    assert response.json() == []


@pytest.mark.asyncio
async def test_comment_requires_authentication(
    client: AsyncClient,
    timeline: Timeline,
    pending_post: Post,
):
    response = await client.post(
        _comments_url(pending_post, timeline.event_id), json={"content": "hi"}
    )

    assert response.status_code == 401
