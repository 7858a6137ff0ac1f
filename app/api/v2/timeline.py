"""Timeline API endpoints."""

from fastapi import APIRouter, Query, status

from app.core.deps import CurrentIdentity, CurrentIdentityRequired, DBSession
from app.schemas.timeline import (
    CommentCreate,
    CommentDTO,
    LikeDTO,
    LikeStatus,
    ModerationAction,
    PostCreate,
    PostDTO,
    TimelineAccessCreate,
    TimelineAccessDTO,
    TimelineDTO,
    TimelineSettingsDTO,
    TimelineSettingsUpdate,
)
from app.services.engagement_service import EngagementService
from app.services.timeline_access_service import TimelineAccessService
from app.services.timeline_service import TimelineService

router = APIRouter()


@router.get("/event/{slug}", response_model=TimelineDTO)
async def get_public_timeline(
    slug: str,
    db: DBSession,
    identity: CurrentIdentity,
) -> TimelineDTO:
    """
    Public race-page timeline by event slug.

    Anonymous callers get approved posts only; the event owner gets all.
    """
    timeline_service = TimelineService(db)
    return await timeline_service.get_public_timeline(slug, identity)


@router.get("/{event_id}", response_model=TimelineDTO)
async def get_timeline(
    event_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> TimelineDTO:
    """Get the event's timeline with the posts visible to the caller."""
    timeline_service = TimelineService(db)
    return await timeline_service.get_timeline(event_id, identity)


@router.post(
    "/{event_id}",
    response_model=PostDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    event_id: str,
    data: PostCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> PostDTO:
    """
    Create a timeline post.

    - **content**: Post text
    - **mediaUrl**: Optional attached media URL
    - **mediaType**: Optional media type
    """
    timeline_service = TimelineService(db)
    return await timeline_service.create_post(event_id, identity, data)


@router.get("/{event_id}/settings", response_model=TimelineSettingsDTO)
async def get_timeline_settings(
    event_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> TimelineSettingsDTO:
    """Get effective timeline settings (defaults if none stored)."""
    timeline_service = TimelineService(db)
    return await timeline_service.get_settings(event_id)


@router.put("/{event_id}/settings", response_model=TimelineSettingsDTO)
async def update_timeline_settings(
    event_id: str,
    data: TimelineSettingsUpdate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> TimelineSettingsDTO:
    """
    Write timeline settings (event owner only).

    Fields left out of the body are reset to their defaults.
    """
    timeline_service = TimelineService(db)
    return await timeline_service.update_settings(event_id, identity, data)


@router.put("/{event_id}/posts/{post_id}", response_model=PostDTO)
async def moderate_post(
    event_id: str,
    post_id: int,
    data: ModerationAction,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> PostDTO:
    """
    Approve or reject a post (event owner only).

    - **action**: "approve" or "reject"
    """
    timeline_service = TimelineService(db)
    return await timeline_service.moderate_post(
        event_id, post_id, identity, data.action
    )


@router.get("/{event_id}/posts/{post_id}/likes", response_model=LikeStatus)
async def get_likes(
    event_id: str,
    post_id: int,
    db: DBSession,
    identity: CurrentIdentity,
) -> LikeStatus:
    """Like count and whether the caller liked the post."""
    engagement_service = EngagementService(db)
    return await engagement_service.get_like_status(event_id, post_id, identity)


@router.post("/{event_id}/posts/{post_id}/likes", response_model=LikeDTO)
async def add_like(
    event_id: str,
    post_id: int,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> LikeDTO:
    """Like a post."""
    engagement_service = EngagementService(db)
    return await engagement_service.add_like(event_id, post_id, identity)


@router.delete("/{event_id}/posts/{post_id}/likes")
async def remove_like(
    event_id: str,
    post_id: int,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> dict:
    """Remove the caller's like."""
    engagement_service = EngagementService(db)
    await engagement_service.remove_like(event_id, post_id, identity)
    return {"message": "Like removed"}


@router.get("/{event_id}/posts/{post_id}/comments", response_model=list[CommentDTO])
async def get_comments(
    event_id: str,
    post_id: int,
    db: DBSession,
) -> list[CommentDTO]:
    """List comments on a post, newest first."""
    engagement_service = EngagementService(db)
    return await engagement_service.list_comments(event_id, post_id)


@router.post("/{event_id}/posts/{post_id}/comments", response_model=CommentDTO)
async def add_comment(
    event_id: str,
    post_id: int,
    data: CommentCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> CommentDTO:
    """
    Comment on a post.

    - **content**: Comment text (required)
    """
    engagement_service = EngagementService(db)
    return await engagement_service.add_comment(
        event_id, post_id, identity, data.content
    )


@router.get("/{event_id}/users", response_model=list[TimelineAccessDTO])
async def list_timeline_users(
    event_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> list[TimelineAccessDTO]:
    """List access grants (event owner only)."""
    access_service = TimelineAccessService(db)
    return await access_service.list_access(event_id, identity)


@router.post("/{event_id}/users", response_model=TimelineAccessDTO)
async def add_timeline_user(
    event_id: str,
    data: TimelineAccessCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> TimelineAccessDTO:
    """
    Grant a timeline role (event owner only).

    - **email**: Email of an existing user
    - **role**: viewer, poster or admin
    """
    access_service = TimelineAccessService(db)
    return await access_service.grant_access(event_id, identity, data)


@router.delete("/{event_id}/users")
async def remove_timeline_user(
    event_id: str,
    db: DBSession,
    identity: CurrentIdentityRequired,
    user_id: str = Query(..., alias="userId"),
) -> dict:
    """Revoke a user's timeline role (event owner only)."""
    access_service = TimelineAccessService(db)
    await access_service.revoke_access(event_id, identity, user_id)
    return {"success": True}
