from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ReservationNotFoundError, StoreError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto import CancellationResult
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.value_object.itinerary import total_price


class CancelReservationUseCase:
    """
    Delete a reservation and refund it if it was paid.

    Deleting the row frees its seats at once; the rid is never handed out again.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, session: CustomerSession, rid: int) -> CancellationResult:
        username = session.require_username('Cannot cancel reservations, not logged in')
        failure_message = f'Failed to cancel reservation {rid}'

        async def _cancel(uow: AbstractUnitOfWork) -> CancellationResult:
            reservation = await uow.reservations.get(username=username, rid=rid)
            if reservation is None:
                raise ReservationNotFoundError(failure_message)

            user = await uow.users.get_by_username(username=username)
            if user is None:
                raise StoreError(failure_message)

            refund = 0
            if reservation.paid:
                flights = []
                for fid in reservation.fids:
                    flight = await uow.flights.get_by_fid(fid=fid)
                    if flight is None:
                        raise StoreError(failure_message)
                    flights.append(flight)
                refund = total_price(flights)
                user = user.deposit(refund)
                await uow.users.update_balance(username=username, balance=user.balance)

            await uow.reservations.delete(rid=rid)
            return CancellationResult(rid=rid, refund=refund, balance=user.balance)

        return await run_in_transaction(
            self.uow_factory, _cancel, failure_message=failure_message
        )
