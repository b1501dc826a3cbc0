"""Shared fixtures.

Database fixtures use SQLite in-memory through aiosqlite so the suite
runs without Docker. Savepoints need the driver's own transaction
handling disabled, which the engine fixture takes care of.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import order_numbering.models  # noqa: F401
from order_numbering.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the environment and any .env file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url="sqlite+aiosqlite:///:memory:",
        timezone="Asia/Taipei",
        purchase_order_prefix="",
        shipping_order_prefix="",
        sale_order_prefix="",
        order_number_short_year=False,
        order_number_sequence_digits=3,
        order_number_sequence_start=1,
        order_number_max_unique_attempts=100,
        order_number_max_insert_retries=5,
        order_number_use_counter=True,
    )


@pytest.fixture
async def memory_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory SQLite engine for isolated testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(memory_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a database session for testing."""
    session_factory = async_sessionmaker(memory_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
