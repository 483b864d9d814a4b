"""Result DTOs handed from the use cases to the driving adapters."""

import attrs

from src.service.flight_booking.domain.entity.flight_entity import FlightEntity
from src.service.flight_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.flight_booking.domain.value_object.itinerary import Itinerary


@attrs.define(frozen=True)
class SearchResult:
    """
    Ranked itineraries of one search.

    generation identifies the search inside its session; a booking may quote it
    to make sure the itinerary index still refers to this result.
    """

    generation: int
    itineraries: tuple[Itinerary, ...]


@attrs.define(frozen=True)
class PaymentReceipt:
    rid: int
    balance: int


@attrs.define(frozen=True)
class CancellationResult:
    rid: int
    refund: int
    balance: int


@attrs.define(frozen=True)
class ReservationDetail:
    reservation: ReservationEntity
    flights: tuple[FlightEntity, ...]
