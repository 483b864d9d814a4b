from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger


class ClearTablesUseCase:
    """
    Remove every reservation and user and restart rids at 1.

    Flights are reference data and stay. This is the only operation that
    restarts the rid sequence.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(self) -> None:
        async def _clear(uow: AbstractUnitOfWork) -> None:
            await uow.reservations.delete_all_and_restart_ids()
            await uow.users.delete_all()

        await run_in_transaction(self.uow_factory, _clear, failure_message='Failed to clear tables')
