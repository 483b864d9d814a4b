"""
Test Configuration and Fixtures

This module provides:
- Test environment (SQLite database file, cheap bcrypt, quiet logging) set up
  before any application module reads settings
- Schema reset for every integration test
- Flight seeding helpers and the HTTP TestClient

Architecture:
- Unit tests (marked `unit`): no database; use cases run against AsyncMock
  units of work
- Integration tests: real SQLAlchemy store, recreated for every test

Set TEST_DATABASE_URL to run the integration suite against PostgreSQL.
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# src.platform.config.core_setting builds `settings` at import time
# =============================================================================
import os
from pathlib import Path
import tempfile


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_db_dir = Path(tempfile.mkdtemp(prefix='flight_booking_test_'))
    os.environ['DATABASE_URL'] = os.environ.get(
        'TEST_DATABASE_URL', f'sqlite+aiosqlite:///{test_db_dir / "flight_booking_test.db"}'
    )

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DEBUG'] = 'false'
    os.environ['BCRYPT_ROUNDS'] = '4'
    os.environ['TRANSACTION_RETRY_BACKOFF_SECONDS'] = '0.01'
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from concurrent.futures import ThreadPoolExecutor  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Generator, Iterable  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.database.orm_db_setting import (  # noqa: E402
    AsyncEngineManager,
    Base,
    Database,
    dispose_engine,
)
from src.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork  # noqa: E402
from src.service.flight_booking.domain.entity.flight_entity import FlightEntity  # noqa: E402
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel  # noqa: E402


# =============================================================================
# Pytest Hooks: integration tests get a fresh schema
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _reset_schema() -> None:
    # A private engine, so the application's loop-bound engine is never touched
    import src.service.flight_booking.driven_adapter.model  # noqa: F401

    manager = AsyncEngineManager()
    try:
        async with manager.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await manager.dispose()


async def _insert_flights(flights: Iterable[FlightEntity]) -> None:
    manager = AsyncEngineManager()
    try:
        async with manager.get_session_maker()() as session:
            session.add_all(
                FlightModel(
                    fid=f.fid,
                    day_of_month=f.day_of_month,
                    carrier_id=f.carrier_id,
                    flight_num=f.flight_num,
                    origin_city=f.origin_city,
                    dest_city=f.dest_city,
                    actual_time=f.duration_minutes,
                    capacity=f.capacity,
                    price=f.price,
                    canceled=f.canceled,
                )
                for f in flights
            )
            await session.commit()
    finally:
        await manager.dispose()


def _run_sync(coro: Any) -> Any:
    # Own thread and loop, so it works from sync and async tests alike
    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    _run_sync(_reset_schema())
    yield


@pytest.fixture
def seed_flights() -> Callable[[Iterable[FlightEntity]], None]:
    """Insert reference flights into the (already reset) store."""

    def _seed(flights: Iterable[FlightEntity]) -> None:
        _run_sync(_insert_flights(list(flights)))

    return _seed


@pytest.fixture
async def uow_factory() -> AsyncGenerator[Callable[[], AbstractUnitOfWork], None]:
    database = Database()
    yield lambda: SqlAlchemyUnitOfWork(database.session)
    # Engine is bound to this test's loop; release it before the loop closes
    await dispose_engine()


@pytest.fixture
def client(clean_database: None) -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
