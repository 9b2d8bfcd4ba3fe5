"""User service for session token authentication."""

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import User, UserSession

logger = logging.getLogger(__name__)


class UserService:
    """Service class for user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate_token(self, token: str) -> tuple[User | None, str | None]:
        """Resolve a bearer token to its user.

        Args:
            token: Session token from the Authorization header

        Returns:
            Tuple of (user, error) - error is None when the token is valid
        """
        session, error = await self.authenticate_session(token)
        return (session.user if session else None), error

    async def authenticate_session(
        self, token: str
    ) -> tuple[UserSession | None, str | None]:
        """Resolve a bearer token to its live session, with the user loaded.

        Expired sessions are deleted as they are found.
        """
        result = await self.db.execute(
            select(UserSession)
            .options(selectinload(UserSession.user))
            .where(UserSession.session_token == token)
        )
        session = result.scalar_one_or_none()

        if session is None:
            return None, "Invalid session"

        if datetime.utcnow() > session.expires:
            await self.db.execute(delete(UserSession).where(UserSession.id == session.id))
            await self.db.commit()
            logger.info(f"Removed expired session of user {session.user_id}")
            return None, "Session expired"

        if not session.user.is_active:
            return None, "Account is inactive"

        return session, None
