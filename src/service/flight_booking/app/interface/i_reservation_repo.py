from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.flight_booking.domain.entity.reservation_entity import ReservationEntity


class IReservationRepo(ABC):
    @abstractmethod
    async def create(self, *, username: str, fid1: int, fid2: Optional[int]) -> int:
        """Insert an unpaid reservation and return its store-assigned rid."""
        pass

    @abstractmethod
    async def count_by_flight(self, *, fid: int) -> int:
        """Reservations referencing the flight as either leg."""
        pass

    @abstractmethod
    async def list_by_username(self, *, username: str) -> List[ReservationEntity]:
        pass

    @abstractmethod
    async def get(self, *, username: str, rid: int) -> Optional[ReservationEntity]:
        pass

    @abstractmethod
    async def mark_paid(self, *, rid: int) -> None:
        pass

    @abstractmethod
    async def delete(self, *, rid: int) -> None:
        pass

    @abstractmethod
    async def delete_all_and_restart_ids(self) -> None:
        pass
