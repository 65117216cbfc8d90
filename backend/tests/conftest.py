import os

# Configure before any tasktrack import: Settings are read at import time.
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tasktrack.models import Base, User  # noqa: E402
from tasktrack.services.account_service import AccountService  # noqa: E402

# Test credentials (consistent across tests for predictable auth)
TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "secret123"  # nosec B105
TEST_NAME = "Test User"

USER_B_EMAIL = "userb@example.com"
USER_B_PASSWORD = "password-b"  # nosec B105

API = "/api/v1"


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a bearer token."""
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def db_engine(tmp_path):
    """Create a throwaway SQLite database with all tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Registered user with TEST_EMAIL / TEST_PASSWORD."""
    user = await AccountService(db_session).register_user(
        name=TEST_NAME, email=TEST_EMAIL, password=TEST_PASSWORD
    )
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Second user for cross-user isolation tests."""
    user = await AccountService(db_session).register_user(
        name="User B", email=USER_B_EMAIL, password=USER_B_PASSWORD
    )
    await db_session.commit()
    return user


@pytest_asyncio.fixture
async def test_token(db_session: AsyncSession, test_user: User) -> str:
    """Plain bearer token for test_user."""
    token, _ = await AccountService(db_session).authenticate(
        email=test_user.email, password=TEST_PASSWORD
    )
    await db_session.commit()
    return token


@pytest_asyncio.fixture
async def token_b(db_session: AsyncSession, user_b: User) -> str:
    """Plain bearer token for user_b."""
    token, _ = await AccountService(db_session).authenticate(
        email=user_b.email, password=USER_B_PASSWORD
    )
    await db_session.commit()
    return token


@pytest_asyncio.fixture
async def unauthenticated_client(
    session_factory,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test database, no credentials.

    Overrides get_db with the same commit/rollback behaviour against the
    test engine.
    """
    from tasktrack.core.database import get_db
    from tasktrack.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    unauthenticated_client: AsyncClient, test_token: str
) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as test_user via Authorization header."""
    unauthenticated_client.headers.update(bearer(test_token))
    yield unauthenticated_client
