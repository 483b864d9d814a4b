"""
Unit of Work Pattern - one database session and transaction per operation attempt

Architecture:
- UoW owns the session lifecycle (open on enter, close on exit)
- UoW owns commit/rollback; exit always rolls back whatever was not committed
- Repositories share the UoW's session
- Use cases coordinate the repositories through the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.flight_booking.app.interface.i_flight_query_repo import IFlightQueryRepo
    from src.service.flight_booking.app.interface.i_reservation_repo import IReservationRepo
    from src.service.flight_booking.app.interface.i_user_repo import IUserRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the booking service

    Usage:
        async with uow:
            rid = await uow.reservations.create(username=..., fid1=..., fid2=None)
            await uow.commit()
    """

    users: IUserRepo
    flights: IFlightQueryRepo
    reservations: IReservationRepo

    _active: bool = False

    async def __aenter__(self) -> AbstractUnitOfWork:
        if self._active:
            raise RuntimeError('Nested unit of work is not allowed')
        self._active = True
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await self.rollback()
        finally:
            self._active = False

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    The engine fixes the isolation level (SERIALIZABLE on PostgreSQL, BEGIN
    IMMEDIATE on SQLite); the first statement issued through any repository
    opens the transaction.
    """

    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self._session_cm: Optional[AsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> AbstractUnitOfWork:
        from src.service.flight_booking.driven_adapter.repo.flight_query_repo_impl import (
            FlightQueryRepoImpl,
        )
        from src.service.flight_booking.driven_adapter.repo.reservation_repo_impl import (
            ReservationRepoImpl,
        )
        from src.service.flight_booking.driven_adapter.repo.user_repo_impl import UserRepoImpl

        await super().__aenter__()
        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        # Repositories with shared session
        self.users = UserRepoImpl(session=self.session)
        self.flights = FlightQueryRepoImpl(session=self.session)
        self.reservations = ReservationRepoImpl(session=self.session)
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            session_cm, self._session_cm, self.session = self._session_cm, None, None
            if session_cm is not None:
                await session_cm.__aexit__(*args)

    async def _commit(self) -> None:
        assert self.session is not None, 'commit outside of unit of work'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
