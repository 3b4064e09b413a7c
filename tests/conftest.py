import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rewards.db.base import Base
from rewards.db.session import get_db
from rewards.main import app
from rewards.models.task import Task
from rewards.services import seeding

VALID_WALLET = "0x" + "a1" * 20  # 42 characters


@pytest_asyncio.fixture(name="engine")
async def engine_fixture():
    # One shared in-memory database per test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session_factory")
async def session_factory_fixture(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture(name="db")
async def db_fixture(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(name="tasks")
async def tasks_fixture(db):
    """The default task set, as seeded in production."""
    await seeding.seed_default_tasks(db)
    result = await db.execute(select(Task).order_by(Task.id))
    return list(result.scalars().all())


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_factory, tasks):
    async def get_db_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = get_db_override

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(name="make_client")
async def make_client_fixture(session_factory, tasks):
    """Factory for extra clients with their own cookie jar (one per user)."""
    async def get_db_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = get_db_override
    clients = []

    def _make() -> AsyncClient:
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


async def signup(client, username, email=None, password="secret123", referred_by=None):
    body = {"username": username, "email": email or f"{username}@example.com", "password": password}
    if referred_by is not None:
        body["referredBy"] = referred_by
    return await client.post("/api/auth/signup", json=body)
