"""
Interactive flight service shell

One process is one customer session. Commands are read line by line from
stdin, tokenized with shell quoting ("Seattle WA" is one token), and answered
with the same response text as the HTTP API.

    create <username> <password> <initial amount>
    login <username> <password>
    search <origin city> <destination city> <direct> <day> <num itineraries>
    book <itinerary id>
    pay <reservation id>
    reservations
    cancel <reservation id>
    quit
"""

import shlex
import sys
from typing import Awaitable, Callable, TextIO

import anyio

from src.platform.config.di import Container, container
from src.platform.constant.store_limit import STORE_INT_MAX, STORE_INT_MIN
from src.platform.database.orm_db_setting import create_db_and_tables, dispose_engine
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.book_itinerary_use_case import BookItineraryUseCase
from src.service.flight_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.flight_booking.app.command.create_customer_use_case import (
    CreateCustomerUseCase,
)
from src.service.flight_booking.app.command.login_use_case import LoginUseCase
from src.service.flight_booking.app.command.pay_reservation_use_case import (
    PayReservationUseCase,
)
from src.service.flight_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.flight_booking.app.query.search_itineraries_use_case import (
    SearchItinerariesUseCase,
)
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.driving_adapter.presenter import response_text


PROMPT = '> '
GOODBYE = 'Goodbye\n'
CHECK_COMMAND = 'Error: Please check your command\n'
PARSE_INT_FAILED = 'Failed to parse integer\n'

CommandHandler = Callable[[list[str]], Awaitable[str]]


class CommandParseError(Exception):
    pass


def _to_int(token: str) -> int:
    try:
        value = int(token)
    except ValueError as e:
        raise CommandParseError(token) from e
    if not STORE_INT_MIN <= value <= STORE_INT_MAX:
        raise CommandParseError(token)
    return value


class FlightServiceShell:
    def __init__(
        self,
        *,
        create_customer: CreateCustomerUseCase,
        login: LoginUseCase,
        search: SearchItinerariesUseCase,
        book: BookItineraryUseCase,
        pay: PayReservationUseCase,
        cancel: CancelReservationUseCase,
        list_reservations: ListReservationsUseCase,
        session: CustomerSession | None = None,
    ) -> None:
        self.create_customer = create_customer
        self.login = login
        self.search = search
        self.book = book
        self.pay = pay
        self.cancel = cancel
        self.list_reservations = list_reservations
        self.session = session or CustomerSession(session_id='shell')
        self._handlers: dict[str, tuple[int, str, CommandHandler]] = {
            'create': (
                3,
                'Error: Please provide a username, password, and initial amount in the account\n',
                self._create,
            ),
            'login': (2, 'Error: Please provide a username and password\n', self._login),
            'search': (
                5,
                'Error: Please provide all search parameters '
                '<origin_city> <destination_city> <direct> <date> <nb itineraries>\n',
                self._search,
            ),
            'book': (1, 'Error: Please provide an itinerary_id\n', self._book),
            'pay': (1, 'Error: Please provide a reservation_id\n', self._pay),
            'cancel': (1, 'Error: Please provide a reservation_id\n', self._cancel),
            'reservations': (0, CHECK_COMMAND, self._reservations),
        }

    @classmethod
    def from_container(cls, di: Container) -> 'FlightServiceShell':
        return cls(
            create_customer=di.create_customer_use_case(),
            login=di.login_use_case(),
            search=di.search_itineraries_use_case(),
            book=di.book_itinerary_use_case(),
            pay=di.pay_reservation_use_case(),
            cancel=di.cancel_reservation_use_case(),
            list_reservations=di.list_reservations_use_case(),
        )

    async def execute_command(self, line: str) -> str:
        """Run one command line and return the text to print."""
        try:
            tokens = shlex.split(line)
        except ValueError:
            return CHECK_COMMAND
        if not tokens:
            return CHECK_COMMAND

        command, args = tokens[0], tokens[1:]
        if command == 'quit':
            return GOODBYE
        if command not in self._handlers:
            return CHECK_COMMAND

        arity, usage, handler = self._handlers[command]
        if len(args) != arity:
            return usage
        try:
            return await handler(args)
        except CommandParseError:
            return PARSE_INT_FAILED
        except CustomBaseError as e:
            return response_text.error(e)

    async def run(self, stdin: TextIO, stdout: TextIO) -> None:
        while True:
            stdout.write(PROMPT)
            stdout.flush()
            line = await anyio.to_thread.run_sync(stdin.readline)
            if not line:
                break
            output = await self.execute_command(line)
            stdout.write(output)
            stdout.flush()
            if output == GOODBYE:
                break

    async def _create(self, args: list[str]) -> str:
        username, password, amount = args
        user = await self.create_customer.execute(
            username=username, password=password, initial_balance=_to_int(amount)
        )
        return response_text.created_user(user.username)

    async def _login(self, args: list[str]) -> str:
        username, password = args
        logged_in_as = await self.login.execute(
            session=self.session, username=username, password=password
        )
        return response_text.logged_in(logged_in_as)

    async def _search(self, args: list[str]) -> str:
        origin, destination, direct, day, limit = args
        result = await self.search.execute(
            session=self.session,
            origin=origin,
            destination=destination,
            day=_to_int(day),
            direct_only=direct == '1',
            limit=_to_int(limit),
        )
        return response_text.search_result(result)

    async def _book(self, args: list[str]) -> str:
        rid = await self.book.execute(session=self.session, itinerary_id=_to_int(args[0]))
        return response_text.booked(rid)

    async def _pay(self, args: list[str]) -> str:
        receipt = await self.pay.execute(session=self.session, rid=_to_int(args[0]))
        return response_text.paid(receipt)

    async def _cancel(self, args: list[str]) -> str:
        result = await self.cancel.execute(session=self.session, rid=_to_int(args[0]))
        return response_text.canceled(result)

    async def _reservations(self, args: list[str]) -> str:
        details = await self.list_reservations.execute(session=self.session)
        return response_text.reservations(details)


async def _serve() -> None:
    await create_db_and_tables()
    shell = FlightServiceShell.from_container(container)
    Logger.base.info('🛫 [Flight Shell] Ready')
    try:
        await shell.run(sys.stdin, sys.stdout)
    finally:
        await dispose_engine()


def main() -> None:
    anyio.run(_serve)


if __name__ == '__main__':
    main()
