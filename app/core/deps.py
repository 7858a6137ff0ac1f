"""FastAPI dependencies for dependency injection."""

from dataclasses import dataclass
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Unauthorized
from app.core.security import decode_access_token
from app.db.session import async_session_maker

# Security scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the identity provider."""

    user_id: str
    username: str | None = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


def resolve_identity(
    credentials: HTTPAuthorizationCredentials | None,
) -> Identity | None:
    """Resolve bearer credentials to an identity, or None when absent/invalid."""
    if not credentials:
        return None

    payload = decode_access_token(credentials.credentials)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return Identity(user_id=str(user_id), username=payload.get("username"))


async def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity | None:
    """Get the caller's identity from the bearer token, if any."""
    return resolve_identity(credentials)


async def get_identity_required(
    identity: Annotated[Identity | None, Depends(get_identity)],
) -> Identity:
    """Require an authenticated caller, raise Unauthorized otherwise."""
    if not identity:
        raise Unauthorized("Authentication required")
    return identity


# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentIdentity = Annotated[Identity | None, Depends(get_identity)]
CurrentIdentityRequired = Annotated[Identity, Depends(get_identity_required)]
