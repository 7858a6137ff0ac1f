"""User profile API endpoints."""

from fastapi import APIRouter, status

from app.core.deps import CurrentIdentityRequired, DBSession
from app.schemas.user import ProfileCreate, ProfileDTO, ProfileUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.post("", response_model=ProfileDTO, status_code=status.HTTP_201_CREATED)
async def create_profile(
    data: ProfileCreate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> ProfileDTO:
    """
    Create the caller's profile.

    - **username**: Requested username, slugified and made unique
    - **email**: Optional contact email
    """
    user_service = UserService(db)
    return await user_service.create_profile(identity, data)


@router.put("/me", response_model=ProfileDTO)
async def update_profile(
    data: ProfileUpdate,
    db: DBSession,
    identity: CurrentIdentityRequired,
) -> ProfileDTO:
    """Update the caller's username or bio."""
    user_service = UserService(db)
    return await user_service.update_profile(identity, data)


@router.get("/{username}", response_model=ProfileDTO)
async def get_profile(
    username: str,
    db: DBSession,
) -> ProfileDTO:
    """Get a public profile by username."""
    user_service = UserService(db)
    return await user_service.get_profile(username)
