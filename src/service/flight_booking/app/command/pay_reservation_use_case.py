from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    InsufficientFundsError,
    ReservationNotFoundError,
    StoreError,
)
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto import PaymentReceipt
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.value_object.itinerary import total_price


class PayReservationUseCase:
    """
    Pay an unpaid reservation from the user's balance.

    A missing reservation and an already-paid one produce the same error.
    The payment only goes through when the balance stays strictly positive.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self, *, session: CustomerSession, rid: int) -> PaymentReceipt:
        username = session.require_username('Cannot pay, not logged in')
        failure_message = f'Failed to pay for reservation {rid}'

        async def _pay(uow: AbstractUnitOfWork) -> PaymentReceipt:
            reservation = await uow.reservations.get(username=username, rid=rid)
            if reservation is None or reservation.paid:
                raise ReservationNotFoundError(
                    f'Cannot find unpaid reservation {rid} under user: {username}'
                )

            flights = []
            for fid in reservation.fids:
                flight = await uow.flights.get_by_fid(fid=fid)
                if flight is None:
                    raise StoreError(failure_message)
                flights.append(flight)
            price = total_price(flights)

            user = await uow.users.get_by_username(username=username)
            if user is None:
                raise StoreError(failure_message)
            if user.balance - price <= 0:
                raise InsufficientFundsError(balance=user.balance, cost=price)

            paying_user = user.withdraw(price)
            await uow.users.update_balance(username=username, balance=paying_user.balance)
            await uow.reservations.mark_paid(rid=rid)
            return PaymentReceipt(rid=rid, balance=paying_user.balance)

        return await run_in_transaction(self.uow_factory, _pay, failure_message=failure_message)
