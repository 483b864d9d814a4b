"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.flight_booking.app.command.book_itinerary_use_case import BookItineraryUseCase
from src.service.flight_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.flight_booking.app.command.clear_tables_use_case import ClearTablesUseCase
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
from src.service.flight_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.flight_booking.driving_adapter.http_controller.session_registry import (
    SessionRegistry,
)


class Container(containers.DeclarativeContainer):
    # Database (shared event-loop-aware engine)
    database = providers.Singleton(Database)

    # One fresh unit of work per transaction attempt; use cases get the factory
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Security
    password_hasher = providers.Singleton(BcryptPasswordHasher)

    # HTTP sessions (cookie -> CustomerSession)
    session_registry = providers.Singleton(SessionRegistry)

    # Use cases (stateless; all session state is passed into execute)
    create_customer_use_case = providers.Singleton(
        CreateCustomerUseCase,
        uow_factory=unit_of_work.provider,
        password_hasher=password_hasher,
    )
    login_use_case = providers.Singleton(
        LoginUseCase,
        uow_factory=unit_of_work.provider,
        password_hasher=password_hasher,
    )
    search_itineraries_use_case = providers.Singleton(
        SearchItinerariesUseCase, uow_factory=unit_of_work.provider
    )
    book_itinerary_use_case = providers.Singleton(
        BookItineraryUseCase, uow_factory=unit_of_work.provider
    )
    pay_reservation_use_case = providers.Singleton(
        PayReservationUseCase, uow_factory=unit_of_work.provider
    )
    cancel_reservation_use_case = providers.Singleton(
        CancelReservationUseCase, uow_factory=unit_of_work.provider
    )
    list_reservations_use_case = providers.Singleton(
        ListReservationsUseCase, uow_factory=unit_of_work.provider
    )
    clear_tables_use_case = providers.Singleton(
        ClearTablesUseCase, uow_factory=unit_of_work.provider
    )


container = Container()
