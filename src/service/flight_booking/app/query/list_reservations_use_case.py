from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NoReservationsError, StoreError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto import ReservationDetail
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession


LIST_FAILED = 'Failed to retrieve reservations'


class ListReservationsUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, session: CustomerSession) -> list[ReservationDetail]:
        """Reservations of the logged-in user by rid, with their flights resolved."""
        username = session.require_username('Cannot view reservations, not logged in')

        async def _list(uow: AbstractUnitOfWork) -> list[ReservationDetail]:
            details = []
            for reservation in await uow.reservations.list_by_username(username=username):
                flights = []
                for fid in reservation.fids:
                    flight = await uow.flights.get_by_fid(fid=fid)
                    if flight is None:
                        raise StoreError(LIST_FAILED)
                    flights.append(flight)
                details.append(ReservationDetail(reservation=reservation, flights=tuple(flights)))
            return details

        details = await run_in_transaction(self.uow_factory, _list, failure_message=LIST_FAILED)
        if not details:
            raise NoReservationsError()
        return details
