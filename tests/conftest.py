"""
RecipeBox Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite) with the
       full schema created from Base.metadata. API tests talk to the FastAPI
       app through httpx's ASGITransport with the session dependency pointed
       at that database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:    in-memory SQLite engine with tables created
    ├── db_session:   AsyncSession bound to db_engine (service-level tests)
    ├── make_recipe:  helper that inserts a Recipe row directly
    ├── make_user:    helper that registers a user through UserService
    └── test_client:  HTTPX AsyncClient wired to the app and db_engine
"""

import os

# Set before any recipebox import so the settings singleton and the module
# level engine never point at a real database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import recipebox.models  # noqa: E402,F401
from recipebox.database import Base, get_db_session  # noqa: E402
from recipebox.models.recipe import Recipe  # noqa: E402
from recipebox.services.user_service import user_service  # noqa: E402


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine. StaticPool keeps a single connection so every
    session in the test sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_recipe(db_session):
    """
    Insert a recipe straight into the store, bypassing RecipeService.

    Usage:
        recipe = await make_recipe(title="Soup", trend_score=5, likes=10)
    """
    async def _make(**fields) -> Recipe:
        fields.setdefault("extra", {})
        recipe = Recipe(**fields)
        db_session.add(recipe)
        await db_session.flush()
        return recipe

    return _make


@pytest.fixture
def make_user(db_session):
    """
    Register a user through the service and return its id.

    Usage:
        user_id = await make_user(email="ada@example.com")
    """
    async def _make(
        full_name: str = "Ada Lovelace",
        email: str = "ada@example.com",
        password: str = "analytical-engine",
    ):
        return await user_service.register(
            db_session, full_name=full_name, email=email, raw_password=password
        )

    return _make


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient routed directly into the FastAPI app.

    Each request gets its own session on the test database, committed on
    success and rolled back on error, mirroring get_db_session.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from recipebox.main import app

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
