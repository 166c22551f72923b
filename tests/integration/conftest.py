from contextlib import asynccontextmanager
from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.audit_recorder import SqlAlchemyAuditRecorder
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.depends import get_audit_recorder, get_email_sender, get_unit_of_work

TEST_DB_URI = "sqlite+aiosqlite:///./test.db"


class RecordingEmailSender(IEmailSender):
    """Keeps outgoing mail in memory instead of talking to SMTP"""

    def __init__(self):
        self.outbox: List[Tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, body: str) -> None:
        self.outbox.append((to, subject, body))


@pytest.fixture
def test_config():
    return ApplicationConfig(
        DB_URI=TEST_DB_URI,
        JWT_SECRET="integration-test-secret",
        BCRYPT_ROUNDS=4,
        RATE_LIMIT_ENABLED=False,
        FRONTEND_URL="http://frontend.test",
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def outbox():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client_factory(session_factory, outbox):
    """
    Builds ASGI clients for a given config; the store defaults to the test
    database, pass another session factory to point the app elsewhere.
    """
    from src.api.app import create_app

    apps = []

    @asynccontextmanager
    async def make_client(config, store=None):
        store = store or session_factory
        app = create_app(config)
        apps.append(app)

        async def override_get_unit_of_work():
            async with store() as session:
                yield SqlAlchemyUnitOfWork(session)

        app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
        app.dependency_overrides[get_audit_recorder] = lambda: SqlAlchemyAuditRecorder(store)
        app.dependency_overrides[get_email_sender] = lambda: outbox

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    yield make_client

    for app in apps:
        await app.state.engine.dispose()


@pytest_asyncio.fixture
async def client(test_config, client_factory):
    async with client_factory(test_config) as ac:
        yield ac
