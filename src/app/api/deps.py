"""API dependencies for authentication, database and service access."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.i18n import Translator, create_translator
from app.models.user import User
from app.services.exceptions import ForbiddenError, UnauthorizedError
from app.services.order_service import OrderService
from app.services.redis_service import RedisService, get_redis_service
from app.services.user_service import UserService

security = HTTPBearer(auto_error=False)


def _user_from_cache(data: dict) -> User:
    """Rebuild a detached User from cached session data."""
    user = User(
        phone_number=data.get("phone_number", ""),
        name=data.get("name"),
        is_active=data.get("is_active", True),
        is_admin=data.get("is_admin", False),
    )
    object.__setattr__(user, "id", UUID(data["user_id"]))
    object.__setattr__(user, "created_at", datetime.utcnow())
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    redis_service: Annotated[RedisService, Depends(get_redis_service)],
) -> User:
    """Get current authenticated user from the session bearer token.

    Resolved tokens are cached in Redis for SESSION_CACHE_TTL_SECONDS, never
    past the session's own expiry, so bursts of requests skip the session
    lookup. Deactivating or demoting a user takes effect once the cache
    entry lapses.

    Raises:
        UnauthorizedError: Missing, unknown or expired token, or inactive user
    """
    if credentials is None:
        raise UnauthorizedError("Missing or invalid authorization header")

    token = credentials.credentials

    cached = await redis_service.get_cached_session(token)
    if cached:
        expires = cached.get("expires")
        if expires and datetime.fromisoformat(expires) > datetime.utcnow():
            return _user_from_cache(cached)
        await redis_service.invalidate_session(token)

    session, error = await UserService(db).authenticate_session(token)
    if session is None:
        raise UnauthorizedError(error)

    user = session.user
    remaining = int((session.expires - datetime.utcnow()).total_seconds())
    ttl = min(settings.SESSION_CACHE_TTL_SECONDS, remaining)
    if ttl > 0:
        await redis_service.cache_session(
            token,
            {
                "user_id": str(user.id),
                "phone_number": user.phone_number,
                "name": user.name,
                "is_active": user.is_active,
                "is_admin": user.is_admin,
                "expires": session.expires.isoformat(),
            },
            ttl=ttl,
        )
    return user


async def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Get current user and verify they are an admin.

    Raises:
        ForbiddenError: If user is not an admin
    """
    if not current_user.is_admin:
        raise ForbiddenError("Admin privileges required")
    return current_user


def get_translator(request: Request) -> Translator:
    """Translator bound to the request's language."""
    return create_translator(request.headers)


async def get_order_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    redis_service: Annotated[RedisService, Depends(get_redis_service)],
) -> OrderService:
    """Get OrderService instance with injected dependencies."""
    return OrderService(db, redis_service)


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(get_current_admin_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Translate = Annotated[Translator, Depends(get_translator)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
