"""
Serializable transaction runner with bounded retry

Every read-then-write business operation runs through run_in_transaction:
one fresh unit of work per attempt, explicit commit, rollback on every other
exit path. Only transient store failures are retried; domain errors propagate
unchanged after rollback.
"""

from typing import Awaitable, Callable, Optional, TypeVar

import anyio
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import StoreError
from src.platform.logging.loguru_io import Logger


T = TypeVar('T')

UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]

# serialization_failure, deadlock_detected
RETRYABLE_SQLSTATES = frozenset({'40001', '40P01'})


def is_transient_store_error(exc: BaseException) -> bool:
    if isinstance(exc, TimeoutError | OperationalError):
        return True
    if isinstance(exc, DBAPIError):
        orig = exc.orig
        sqlstate = getattr(orig, 'sqlstate', None) or getattr(orig, 'pgcode', None)
        return sqlstate in RETRYABLE_SQLSTATES
    return False


async def run_in_transaction(
    uow_factory: UnitOfWorkFactory,
    work: Callable[[AbstractUnitOfWork], Awaitable[T]],
    *,
    failure_message: str,
    max_retries: Optional[int] = None,
) -> T:
    """
    Run ``work`` inside a unit of work and commit it.

    Raises:
        CustomBaseError: whatever ``work`` raised, after rollback
        StoreError: the store failed or rejected a value (non-transient, or retries
            exhausted)
    """
    retries = settings.TRANSACTION_MAX_RETRIES if max_retries is None else max_retries
    attempt = 0
    while True:
        try:
            async with uow_factory() as uow:
                with anyio.fail_after(settings.TRANSACTION_TIMEOUT_SECONDS):
                    result = await work(uow)
                    await uow.commit()
                return result
        except (SQLAlchemyError, TimeoutError, OSError, OverflowError) as e:
            if is_transient_store_error(e) and attempt < retries:
                delay = settings.TRANSACTION_RETRY_BACKOFF_SECONDS * (2**attempt)
                attempt += 1
                Logger.base.warning(
                    f'🔁 [TX] Transient store failure ({type(e).__name__}: {e}); '
                    f'retry {attempt}/{retries} in {delay:.3f}s'
                )
                await anyio.sleep(delay)
                continue
            Logger.base.error(f'💥 [TX] Transaction failed after {attempt + 1} attempt(s): {e!r}')
            raise StoreError(failure_message) from e
