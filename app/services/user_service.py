"""User service for profile management."""

from functools import lru_cache

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import TTLCache
from app.core.config import get_settings
from app.core.deps import Identity
from app.core.errors import Conflict, InvalidInput, NotFound
from app.core.retry import with_db_retry
from app.core.slug import generate_slug, generate_unique_slug
from app.models.user import User
from app.schemas.user import ProfileCreate, ProfileDTO, ProfileUpdate
from app.services.base_service import BaseService


@lru_cache
def get_profile_cache() -> TTLCache:
    """Process-wide profile cache keyed by username."""
    return TTLCache(get_settings().profile_cache_ttl_seconds)


class UserService(BaseService[User]):
    """User profile service."""

    def __init__(self, db: AsyncSession, cache: TTLCache | None = None):
        super().__init__(db, User)
        self.cache = cache if cache is not None else get_profile_cache()

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_profile(self, username: str) -> ProfileDTO:
        """Read-through cached profile lookup."""
        cached = self.cache.get(username)
        if cached is not None:
            return cached

        user = await with_db_retry(lambda: self.get_by_username(username))
        if not user:
            raise NotFound("User not found")

        profile = self._to_dto(user)
        self.cache.set(username, profile)
        return profile

    async def create_profile(self, identity: Identity, data: ProfileCreate) -> ProfileDTO:
        """Create the caller's profile under a unique slugified username."""
        if await self.get_by_id(identity.user_id):
            raise Conflict("Profile already exists")

        if data.email and await self._email_taken(data.email):
            raise Conflict("Email already in use")

        username = await self._unique_username(data.username)

        user = User(
            id=identity.user_id,
            username=username,
            email=data.email,
            role="USER",
            bio=data.bio,
        )
        user = await self.create(user)
        logger.info(f"Profile created: {user.id} as {user.username}")
        return self._to_dto(user)

    async def update_profile(self, identity: Identity, data: ProfileUpdate) -> ProfileDTO:
        """Update the caller's profile and drop its cache entry."""
        user = await self.get_by_id(identity.user_id)
        if not user:
            raise NotFound("User not found")

        old_username = user.username
        if data.username is not None and generate_slug(data.username) != old_username:
            user.username = await self._unique_username(data.username)
        if data.bio is not None:
            user.bio = data.bio

        await self.update(user)
        self.cache.invalidate(old_username)
        return self._to_dto(user)

    async def _unique_username(self, requested: str) -> str:
        async def exists(slug: str) -> bool:
            return await self.get_by_username(slug) is not None

        username = await generate_unique_slug(requested, exists)
        if not username:
            raise InvalidInput("Username must contain letters or digits")
        return username

    async def _email_taken(self, email: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    @staticmethod
    def _to_dto(user: User) -> ProfileDTO:
        return ProfileDTO(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role,
            bio=user.bio,
            created_at=user.created_at,
        )
