from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_user_repo import IUserRepo
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.driven_adapter.model.user_model import UserModel


class UserRepoImpl(IUserRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_username(self, *, username: str) -> Optional[UserEntity]:
        result = await self.session.execute(select(UserModel).where(UserModel.username == username))
        user_model = result.scalar_one_or_none()
        if not user_model:
            return None
        return self._model_to_entity(user_model)

    @Logger.io
    async def create(self, *, user: UserEntity) -> UserEntity:
        user_model = UserModel(
            username=user.username,
            password=user.hashed_password,
            balance=user.balance,
        )
        self.session.add(user_model)
        await self.session.flush()
        return self._model_to_entity(user_model)

    @Logger.io
    async def update_balance(self, *, username: str, balance: int) -> None:
        await self.session.execute(
            update(UserModel).where(UserModel.username == username).values(balance=balance)
        )

    @Logger.io
    async def delete_all(self) -> None:
        await self.session.execute(delete(UserModel))

    @staticmethod
    def _model_to_entity(user_model: UserModel) -> UserEntity:
        return UserEntity(
            username=user_model.username,
            hashed_password=user_model.password,
            balance=user_model.balance,
        )
