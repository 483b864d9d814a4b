from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.flight_booking.domain.entity.flight_entity import FlightEntity


class IFlightQueryRepo(ABC):
    """Flights are reference data; every query here is parameterized and read-only."""

    @abstractmethod
    async def get_by_fid(self, *, fid: int) -> Optional[FlightEntity]:
        pass

    @abstractmethod
    async def search_direct(
        self, *, origin: str, destination: str, day: int, limit: int
    ) -> List[FlightEntity]:
        """Non-canceled direct flights ordered by (duration, fid)."""
        pass

    @abstractmethod
    async def search_indirect(
        self, *, origin: str, destination: str, day: int, limit: int
    ) -> List[tuple[FlightEntity, FlightEntity]]:
        """Non-canceled same-day connections ordered by (total duration, fid1, fid2)."""
        pass
