"""
Itinerary = OneLeg | TwoLeg

An itinerary is a 1- or 2-flight travel plan produced by a search. It lives
only in the session that searched for it and is addressed by its position in
that search's ranked result.
"""

from typing import Iterable, Sequence, Union

import attrs

from src.service.flight_booking.domain.entity.flight_entity import FlightEntity


@attrs.frozen
class OneLeg:
    first: FlightEntity

    @property
    def flights(self) -> tuple[FlightEntity, ...]:
        return (self.first,)

    @property
    def total_duration(self) -> int:
        return self.first.duration_minutes

    @property
    def day(self) -> int:
        return self.first.day_of_month


@attrs.frozen
class TwoLeg:
    first: FlightEntity
    second: FlightEntity

    @property
    def flights(self) -> tuple[FlightEntity, ...]:
        return (self.first, self.second)

    @property
    def total_duration(self) -> int:
        return self.first.duration_minutes + self.second.duration_minutes

    @property
    def day(self) -> int:
        # Same-day rule looks at the first leg only
        return self.first.day_of_month


Itinerary = Union[OneLeg, TwoLeg]


def rank_itineraries(
    direct: Iterable[FlightEntity], indirect: Iterable[tuple[FlightEntity, FlightEntity]]
) -> list[Itinerary]:
    """
    Direct itineraries first, then indirect, then a stable sort on total duration.

    Python's sort is stable, so equal-duration itineraries keep the store's
    generation order: direct before indirect, fid ascending within each group.
    """
    candidates: list[Itinerary] = [OneLeg(first=flight) for flight in direct]
    candidates.extend(TwoLeg(first=f1, second=f2) for f1, f2 in indirect)
    return sorted(candidates, key=lambda itinerary: itinerary.total_duration)


def total_price(flights: Sequence[FlightEntity]) -> int:
    return sum(flight.price for flight in flights)
