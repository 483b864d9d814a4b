from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.entity.user_entity import UserEntity


class LoginUseCase:
    """
    LoggedOut -> LoggedIn(username)

    Unknown username and wrong password are reported identically.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory, password_hasher: IPasswordHasher) -> None:
        self.uow_factory = uow_factory
        self.password_hasher = password_hasher

    @Logger.io
    async def execute(self, *, session: CustomerSession, username: str, password: str) -> str:
        session.ensure_logged_out()

        async def _load(uow: AbstractUnitOfWork) -> UserEntity | None:
            return await uow.users.get_by_username(username=username)

        user = await run_in_transaction(self.uow_factory, _load, failure_message='Login failed')
        UserEntity.validate_credentials(
            user, plain_password=password, password_hasher=self.password_hasher
        )
        session.log_in(username)
        return username
