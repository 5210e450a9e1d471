"""
RecipeBox Backend — Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling Strategy:
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs (local runs, tests) use SQLAlchemy's default SQLite pool, so
    the sizing options are not passed for them.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    before_sleep_log,
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
)

from recipebox.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Keyword arguments for create_async_engine based on the configured URL."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit without a
# new query (lazy loads are not allowed on AsyncSession)
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    the test suite uses to create the schema in SQLite.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction and re-raises
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/api/recipes/{recipe_id}")
        async def get_recipe(recipe_id: UUID, db: AsyncSession = Depends(get_db_session)):
            return await recipe_service.get_recipe(db, recipe_id)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
@retry(
    stop=stop_after_attempt(settings.db_connect_max_attempts),
    wait=wait_exponential_jitter(
        initial=settings.db_connect_min_wait,
        max=settings.db_connect_max_wait,
        jitter=1,
    ),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def ping_database(target: AsyncEngine = engine) -> None:
    """
    What:  Executes SELECT 1 against the database, retrying with backoff.
    When:  Called during application startup (lifespan handler).
    Raises: The last connection error once all attempts are exhausted.
    """
    async with target.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
