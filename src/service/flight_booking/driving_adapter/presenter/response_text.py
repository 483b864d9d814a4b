"""
Response text

Renders use-case results as the user-facing text shared by the shell and the
HTTP API. Every line ends with a newline.
"""

from typing import Iterable

from src.platform.exception.exceptions import CustomBaseError
from src.service.flight_booking.app.dto import (
    CancellationResult,
    PaymentReceipt,
    ReservationDetail,
    SearchResult,
)
from src.service.flight_booking.domain.entity.flight_entity import FlightEntity


def flight_line(flight: FlightEntity) -> str:
    return (
        f'ID: {flight.fid} Day: {flight.day_of_month} Carrier: {flight.carrier_id} '
        f'Number: {flight.flight_num} Origin: {flight.origin_city} Dest: {flight.dest_city} '
        f'Duration: {flight.duration_minutes} Capacity: {flight.capacity} Price: {flight.price}\n'
    )


def flight_lines(flights: Iterable[FlightEntity]) -> str:
    return ''.join(flight_line(flight) for flight in flights)


def logged_in(username: str) -> str:
    return f'Logged in as {username}\n'


def created_user(username: str) -> str:
    return f'Created user {username}\n'


def search_result(result: SearchResult) -> str:
    text = []
    for i, itinerary in enumerate(result.itineraries):
        text.append(
            f'Itinerary {i}: {len(itinerary.flights)} flight(s), '
            f'{itinerary.total_duration} minutes\n'
        )
        text.append(flight_lines(itinerary.flights))
    return ''.join(text)


def booked(rid: int) -> str:
    return f'Booked flight(s), reservation ID: {rid}\n'


def paid(receipt: PaymentReceipt) -> str:
    return f'Paid reservation: {receipt.rid} remaining balance: {receipt.balance}\n'


def canceled(result: CancellationResult) -> str:
    return f'Canceled reservation {result.rid}\n'


def reservations(details: Iterable[ReservationDetail]) -> str:
    text = []
    for detail in details:
        paid_flag = 'true' if detail.reservation.paid else 'false'
        text.append(f'Reservation {detail.reservation.rid} paid: {paid_flag}:\n')
        text.append(flight_lines(detail.flights))
    return ''.join(text)


def error(exc: CustomBaseError) -> str:
    return f'{exc.message}\n'
