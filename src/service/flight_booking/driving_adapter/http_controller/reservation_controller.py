from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Path, status

from src.platform.config.di import Container
from src.platform.constant.store_limit import STORE_INT_MAX, STORE_INT_MIN
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.book_itinerary_use_case import BookItineraryUseCase
from src.service.flight_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.flight_booking.app.command.pay_reservation_use_case import (
    PayReservationUseCase,
)
from src.service.flight_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    FlightResponse,
)
from src.service.flight_booking.driving_adapter.http_controller.schema.reservation_schema import (
    BookRequest,
    BookResponse,
    CancellationResponse,
    PaymentResponse,
    ReservationListResponse,
    ReservationResponse,
)
from src.service.flight_booking.driving_adapter.http_controller.session_dependency import (
    get_customer_session,
)
from src.service.flight_booking.driving_adapter.presenter import response_text


router = APIRouter()


@router.post('', response_model=BookResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def book_itinerary(
    request: BookRequest,
    session: CustomerSession = Depends(get_customer_session),
    use_case: BookItineraryUseCase = Depends(Provide[Container.book_itinerary_use_case]),
) -> BookResponse:
    rid = await use_case.execute(
        session=session, itinerary_id=request.itinerary_id, generation=request.generation
    )
    return BookResponse(message=response_text.booked(rid), rid=rid)


@router.get('', response_model=ReservationListResponse)
@Logger.io
@inject
async def list_reservations(
    session: CustomerSession = Depends(get_customer_session),
    use_case: ListReservationsUseCase = Depends(Provide[Container.list_reservations_use_case]),
) -> ReservationListResponse:
    details = await use_case.execute(session=session)
    return ReservationListResponse(
        message=response_text.reservations(details),
        reservations=[
            ReservationResponse(
                rid=detail.reservation.rid,
                paid=detail.reservation.paid,
                flights=[FlightResponse.from_entity(flight) for flight in detail.flights],
            )
            for detail in details
        ],
    )


@router.post('/{rid}/pay', response_model=PaymentResponse)
@Logger.io
@inject
async def pay_reservation(
    rid: int = Path(..., ge=STORE_INT_MIN, le=STORE_INT_MAX),
    session: CustomerSession = Depends(get_customer_session),
    use_case: PayReservationUseCase = Depends(Provide[Container.pay_reservation_use_case]),
) -> PaymentResponse:
    receipt = await use_case.execute(session=session, rid=rid)
    return PaymentResponse(
        message=response_text.paid(receipt), rid=receipt.rid, balance=receipt.balance
    )


@router.delete('/{rid}', response_model=CancellationResponse)
@Logger.io
@inject
async def cancel_reservation(
    rid: int = Path(..., ge=STORE_INT_MIN, le=STORE_INT_MAX),
    session: CustomerSession = Depends(get_customer_session),
    use_case: CancelReservationUseCase = Depends(Provide[Container.cancel_reservation_use_case]),
) -> CancellationResponse:
    result = await use_case.execute(session=session, rid=rid)
    return CancellationResponse(
        message=response_text.canceled(result),
        rid=result.rid,
        refund=result.refund,
        balance=result.balance,
    )
