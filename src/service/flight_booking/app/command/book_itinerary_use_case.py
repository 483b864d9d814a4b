from typing import Optional

from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import BookingFailedError, SameDayConflictError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.entity.flight_entity import FlightEntity
from src.service.flight_booking.domain.value_object.itinerary import Itinerary, OneLeg, TwoLeg


class BookItineraryUseCase:
    """
    Book one itinerary of the session's latest search.

    Inside a single serializable transaction:
    1. Reject a second reservation on the itinerary's day (first leg decides)
    2. Check a free seat on every leg (capacity - reservations on the flight)
    3. Insert the reservation; the store assigns the next rid
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(
        self, *, session: CustomerSession, itinerary_id: int, generation: Optional[int] = None
    ) -> int:
        username = session.require_username('Cannot book reservations, not logged in')
        itinerary = session.itinerary_cache.get(itinerary_id, generation=generation)

        async def _book(uow: AbstractUnitOfWork) -> int:
            await self._ensure_day_is_free(uow, username=username, day=itinerary.day)
            if not await self._has_seats(uow, itinerary):
                raise BookingFailedError()

            second = itinerary.second.fid if isinstance(itinerary, TwoLeg) else None
            return await uow.reservations.create(
                username=username, fid1=itinerary.first.fid, fid2=second
            )

        rid = await run_in_transaction(self.uow_factory, _book, failure_message='Booking failed')
        Logger.base.info(f'🎫 [BOOK] {username} reserved itinerary {itinerary_id} as rid {rid}')
        return rid

    @staticmethod
    async def _ensure_day_is_free(uow: AbstractUnitOfWork, *, username: str, day: int) -> None:
        for reservation in await uow.reservations.list_by_username(username=username):
            first_flight = await uow.flights.get_by_fid(fid=reservation.fid1)
            if first_flight is not None and first_flight.day_of_month == day:
                raise SameDayConflictError()

    async def _has_seats(self, uow: AbstractUnitOfWork, itinerary: Itinerary) -> bool:
        if isinstance(itinerary, OneLeg):
            # No second leg: unlimited availability there
            return await self._available(uow, itinerary.first) > 0
        return (
            await self._available(uow, itinerary.first) > 0
            and await self._available(uow, itinerary.second) > 0
        )

    @staticmethod
    async def _available(uow: AbstractUnitOfWork, flight: FlightEntity) -> int:
        # Capacity is re-read inside the transaction, not taken from the search snapshot
        current = await uow.flights.get_by_fid(fid=flight.fid)
        if current is None:
            return 0
        occupied = await uow.reservations.count_by_flight(fid=flight.fid)
        return current.capacity - occupied
