"""
Tests for session token authentication.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from app.models import UserSession
from app.services.user_service import UserService


class TestAuthenticateToken:
    """Tests for UserService.authenticate_token."""

    @pytest.mark.asyncio
    async def test_valid_token(self, db_session, factory):
        user = await factory.user(token="valid-token")

        found, error = await UserService(db_session).authenticate_token("valid-token")

        assert error is None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_unknown_token(self, db_session):
        found, error = await UserService(db_session).authenticate_token("nope")

        assert found is None
        assert error == "Invalid session"

    @pytest.mark.asyncio
    async def test_expired_session_deleted(self, db_session, factory):
        user = await factory.user()
        db_session.add(
            UserSession(
                session_token="old-token",
                user_id=user.id,
                expires=datetime.utcnow() - timedelta(minutes=1),
            )
        )
        await db_session.commit()

        found, error = await UserService(db_session).authenticate_token("old-token")

        assert found is None
        assert error == "Session expired"
        result = await db_session.execute(
            select(UserSession).where(UserSession.session_token == "old-token")
        )
        assert result.scalar_one_or_none() is None

    @pytest.mark.asyncio
    async def test_inactive_user(self, db_session, factory):
        user = await factory.user(token="blocked-token")
        user.is_active = False
        await db_session.commit()

        found, error = await UserService(db_session).authenticate_token("blocked-token")

        assert found is None
        assert error == "Account is inactive"


class TestAuthenticateSession:
    """Tests for UserService.authenticate_session."""

    @pytest.mark.asyncio
    async def test_returns_session_with_expiry(self, db_session, factory):
        user = await factory.user(token="valid-token")

        session, error = await UserService(db_session).authenticate_session("valid-token")

        assert error is None
        assert session.user.id == user.id
        assert session.expires > datetime.utcnow()

    @pytest.mark.asyncio
    async def test_unknown_token(self, db_session):
        session, error = await UserService(db_session).authenticate_session("nope")

        assert session is None
        assert error == "Invalid session"
