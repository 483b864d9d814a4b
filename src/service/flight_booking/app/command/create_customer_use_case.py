from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.flight_booking.domain.entity.user_entity import UserEntity


CREATE_USER_FAILED = 'Failed to create user'


class CreateCustomerUseCase:
    def __init__(self, *, uow_factory: UnitOfWorkFactory, password_hasher: IPasswordHasher) -> None:
        self.uow_factory = uow_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def execute(self, *, username: str, password: str, initial_balance: int) -> UserEntity:
        UserEntity.validate_initial_balance(initial_balance)

        # Hash outside the transaction so the write lock is held briefly
        user = UserEntity(username=username, balance=initial_balance)
        user.set_password(password, self.password_hasher)

        async def _create(uow: AbstractUnitOfWork) -> UserEntity:
            if await uow.users.get_by_username(username=username) is not None:
                raise ConflictError(CREATE_USER_FAILED)
            return await uow.users.create(user=user)

        return await run_in_transaction(
            self.uow_factory, _create, failure_message=CREATE_USER_FAILED
        )
