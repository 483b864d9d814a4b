from typing import List, Optional

from pydantic import BaseModel

from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    FlightResponse,
)


class BookRequest(BaseModel):
    itinerary_id: int
    generation: Optional[int] = None  # search generation the index belongs to

    model_config = {'json_schema_extra': {'example': {'itinerary_id': 0, 'generation': 1}}}


class BookResponse(BaseModel):
    message: str
    rid: int


class PaymentResponse(BaseModel):
    message: str
    rid: int
    balance: int


class CancellationResponse(BaseModel):
    message: str
    rid: int
    refund: int
    balance: int


class ReservationResponse(BaseModel):
    rid: int
    paid: bool
    flights: List[FlightResponse]


class ReservationListResponse(BaseModel):
    message: str
    reservations: List[ReservationResponse]
