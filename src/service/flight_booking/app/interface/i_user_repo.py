from abc import ABC, abstractmethod
from typing import Optional

from src.service.flight_booking.domain.entity.user_entity import UserEntity


class IUserRepo(ABC):
    @abstractmethod
    async def get_by_username(self, *, username: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def create(self, *, user: UserEntity) -> UserEntity:
        pass

    @abstractmethod
    async def update_balance(self, *, username: str, balance: int) -> None:
        pass

    @abstractmethod
    async def delete_all(self) -> None:
        pass
