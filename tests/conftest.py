from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from src.api.deps import get_db_session
from src.api.main import app
from src.domain.models import Role, VerificationStatus
from src.infrastructure.db.base import Base
from src.infrastructure.db.models import Account

from tests.utils import create_account


@pytest.fixture()
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def async_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app with the test database."""

    async def override_db_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture()
async def admin(session: AsyncSession) -> Account:
    return await create_account(
        session,
        email="admin@example.com",
        role=Role.ADMIN,
        status=VerificationStatus.APPROVED,
    )


@pytest.fixture()
async def employer(session: AsyncSession) -> Account:
    """Approved account that owns postings in most tests."""
    return await create_account(
        session,
        email="employer@example.com",
        role=Role.EMPLOYER,
        status=VerificationStatus.APPROVED,
    )


@pytest.fixture()
async def approved_alumni(session: AsyncSession) -> Account:
    return await create_account(
        session, email="approved@example.com", status=VerificationStatus.APPROVED
    )


@pytest.fixture()
async def pending_alumni(session: AsyncSession) -> Account:
    return await create_account(session, email="pending@example.com")
