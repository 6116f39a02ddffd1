"""Shared fixtures for API tests."""
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from models.user import User


async def create_user(db_session: AsyncSession, auth0_id: str, **fields: object) -> User:
    """Insert a user directly, bypassing sign-in."""
    user = User(auth0_id=auth0_id, **fields)
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """A signed-up user with a public profile."""
    return await create_user(
        db_session,
        "auth0|user-a",
        email="a@example.com",
        username="alice",
        first_name="Alice",
        last_name="Anders",
        profile_image_url="https://img.example.com/alice.png",
        visited_countries=["Japan"],
        wishlist_countries=["Peru"],
    )


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """A second user, used for ownership checks."""
    return await create_user(
        db_session,
        "auth0|user-b",
        email="b@example.com",
        username="bob",
        first_name="Bob",
        last_name="Brown",
    )


@pytest.fixture
def client_as(
    db_session: AsyncSession,
    settings: Settings,
) -> Callable[[User | None], AbstractAsyncContextManager[AsyncClient]]:
    """
    Factory for clients authenticated as a given user, with DEV_MODE off.

    Passing None yields an unauthenticated client that goes through real
    token validation.
    """

    @asynccontextmanager
    async def _client_as(user: User | None) -> AsyncGenerator[AsyncClient]:
        from api.main import app
        from core.auth import get_current_user, get_current_user_optional
        from core.config import get_settings
        from core.http_client import set_http_client
        from db.session import get_async_session

        async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
            yield db_session

        app.dependency_overrides[get_async_session] = override_get_async_session
        app.dependency_overrides[get_settings] = lambda: settings
        if user is not None:
            app.dependency_overrides[get_current_user] = lambda: user
            app.dependency_overrides[get_current_user_optional] = lambda: user

        try:
            async with httpx.AsyncClient() as outbound:
                set_http_client(outbound)
                async with AsyncClient(
                    transport=ASGITransport(app=app),
                    base_url="http://test",
                ) as test_client:
                    yield test_client
        finally:
            set_http_client(None)
            app.dependency_overrides.clear()

    return _client_as
