from typing import List

from pydantic import BaseModel

from src.service.flight_booking.domain.entity.flight_entity import FlightEntity
from src.service.flight_booking.domain.value_object.itinerary import Itinerary


class FlightResponse(BaseModel):
    fid: int
    day_of_month: int
    carrier_id: str
    flight_num: str
    origin_city: str
    dest_city: str
    duration_minutes: int
    capacity: int
    price: int

    @classmethod
    def from_entity(cls, flight: FlightEntity) -> 'FlightResponse':
        return cls(
            fid=flight.fid,
            day_of_month=flight.day_of_month,
            carrier_id=flight.carrier_id,
            flight_num=flight.flight_num,
            origin_city=flight.origin_city,
            dest_city=flight.dest_city,
            duration_minutes=flight.duration_minutes,
            capacity=flight.capacity,
            price=flight.price,
        )


class ItineraryResponse(BaseModel):
    itinerary_id: int
    total_duration: int
    flights: List[FlightResponse]

    @classmethod
    def from_itinerary(cls, itinerary_id: int, itinerary: Itinerary) -> 'ItineraryResponse':
        return cls(
            itinerary_id=itinerary_id,
            total_duration=itinerary.total_duration,
            flights=[FlightResponse.from_entity(flight) for flight in itinerary.flights],
        )


class SearchResponse(BaseModel):
    message: str
    generation: int
    itineraries: List[ItineraryResponse]
