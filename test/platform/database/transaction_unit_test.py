"""
Unit tests for run_in_transaction and the unit of work lifecycle
"""

from unittest.mock import MagicMock

import anyio
import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from src.platform.config.core_setting import settings
from src.platform.database.transaction import is_transient_store_error, run_in_transaction
from src.platform.exception.exceptions import BookingFailedError, StoreError
from test.service.flight_booking.flight_test_data import FakeUnitOfWork


class _SerializationFailure(Exception):
    sqlstate = '40001'


def _factory(count: int = 4) -> tuple[MagicMock, list[FakeUnitOfWork]]:
    uows = [FakeUnitOfWork() for _ in range(count)]
    return MagicMock(side_effect=uows), uows


@pytest.mark.unit
class TestRunInTransaction:
    @pytest.mark.asyncio
    async def test_commits_and_returns_result(self):
        factory, uows = _factory()

        async def work(uow):
            return 42

        assert await run_in_transaction(factory, work, failure_message='boom') == 42
        assert uows[0].committed
        assert factory.call_count == 1

    @pytest.mark.asyncio
    async def test_domain_error_rolls_back_without_retry(self):
        factory, uows = _factory()

        async def work(uow):
            raise BookingFailedError()

        with pytest.raises(BookingFailedError):
            await run_in_transaction(factory, work, failure_message='boom')

        assert factory.call_count == 1
        assert not uows[0].committed
        assert uows[0].rollbacks == 1

    @pytest.mark.asyncio
    async def test_transient_failure_is_retried_on_a_fresh_unit_of_work(self):
        factory, uows = _factory()
        attempts = []

        async def work(uow):
            attempts.append(uow)
            if len(attempts) == 1:
                raise OperationalError('BEGIN IMMEDIATE', {}, Exception('database is locked'))
            return 'ok'

        result = await run_in_transaction(factory, work, failure_message='boom', max_retries=2)

        assert result == 'ok'
        assert attempts == uows[:2]
        assert not uows[0].committed
        assert uows[1].committed

    @pytest.mark.asyncio
    async def test_retries_exhausted(self):
        factory, uows = _factory()
        error = DBAPIError('UPDATE users', {}, _SerializationFailure())

        async def work(uow):
            raise error

        with pytest.raises(StoreError) as exc_info:
            await run_in_transaction(factory, work, failure_message='Booking failed', max_retries=2)

        assert exc_info.value.message == 'Booking failed'
        assert exc_info.value.status_code == 503
        assert exc_info.value.__cause__ is error
        assert factory.call_count == 3
        assert not any(uow.committed for uow in uows)

    @pytest.mark.asyncio
    async def test_non_transient_store_error_is_not_retried(self):
        factory, _ = _factory()

        async def work(uow):
            raise IntegrityError('INSERT INTO users', {}, Exception('UNIQUE constraint failed'))

        with pytest.raises(StoreError) as exc_info:
            await run_in_transaction(factory, work, failure_message='Failed to create user')

        assert exc_info.value.message == 'Failed to create user'
        assert factory.call_count == 1

    @pytest.mark.asyncio
    async def test_value_the_driver_cannot_bind_becomes_store_error(self):
        factory, uows = _factory()

        async def work(uow):
            raise OverflowError('Python int too large to convert to SQLite INTEGER')

        with pytest.raises(StoreError) as exc_info:
            await run_in_transaction(
                factory, work, failure_message='Failed to cancel reservation 1'
            )

        assert exc_info.value.message == 'Failed to cancel reservation 1'
        assert isinstance(exc_info.value.__cause__, OverflowError)
        assert factory.call_count == 1
        assert uows[0].rollbacks == 1

    @pytest.mark.asyncio
    async def test_attempt_that_times_out_is_rolled_back_and_retried(self, monkeypatch):
        monkeypatch.setattr(settings, 'TRANSACTION_TIMEOUT_SECONDS', 0.05)
        factory, uows = _factory()
        attempts = []

        async def work(uow):
            attempts.append(uow)
            await uow.users.update_balance(username='alice', balance=200)
            if len(attempts) == 1:
                await anyio.sleep(1)
            return 'paid'

        result = await run_in_transaction(factory, work, failure_message='boom', max_retries=2)

        assert result == 'paid'
        assert attempts == uows[:2]
        assert not uows[0].committed
        assert uows[0].rollbacks == 1
        assert uows[1].committed

    @pytest.mark.asyncio
    async def test_every_attempt_timing_out_surfaces_store_error(self, monkeypatch):
        monkeypatch.setattr(settings, 'TRANSACTION_TIMEOUT_SECONDS', 0.05)
        factory, uows = _factory()

        async def work(uow):
            await anyio.sleep(1)

        with pytest.raises(StoreError) as exc_info:
            await run_in_transaction(
                factory, work, failure_message='Failed to pay for reservation 1', max_retries=2
            )

        assert exc_info.value.message == 'Failed to pay for reservation 1'
        assert isinstance(exc_info.value.__cause__, TimeoutError)
        assert factory.call_count == 3
        assert [uow.rollbacks for uow in uows[:3]] == [1, 1, 1]
        assert not any(uow.committed for uow in uows)


@pytest.mark.unit
class TestTransientErrorClassification:
    def test_serialization_failure(self):
        assert is_transient_store_error(DBAPIError('x', {}, _SerializationFailure()))

    def test_operational_error_and_timeout(self):
        assert is_transient_store_error(OperationalError('x', {}, Exception('locked')))
        assert is_transient_store_error(TimeoutError())

    def test_other_errors(self):
        assert not is_transient_store_error(IntegrityError('x', {}, Exception('dup')))
        assert not is_transient_store_error(ValueError('x'))


@pytest.mark.unit
class TestUnitOfWork:
    @pytest.mark.asyncio
    async def test_nesting_is_rejected(self):
        uow = FakeUnitOfWork()

        async with uow:
            with pytest.raises(RuntimeError):
                async with uow:
                    pass

    @pytest.mark.asyncio
    async def test_exit_always_rolls_back(self):
        uow = FakeUnitOfWork()

        with pytest.raises(ValueError):
            async with uow:
                raise ValueError('boom')

        assert uow.rollbacks == 1
        assert not uow.committed
