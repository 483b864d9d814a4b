"""
Unit tests for CreateCustomerUseCase, LoginUseCase and ListReservationsUseCase
"""

from unittest.mock import AsyncMock, MagicMock

from pydantic import SecretStr
import pytest

from src.platform.exception.exceptions import (
    AlreadyLoggedInError,
    ConflictError,
    LoginError,
    NoReservationsError,
    NotLoggedInError,
    ValidationError,
)
from src.service.flight_booking.app.command.create_customer_use_case import (
    CreateCustomerUseCase,
)
from src.service.flight_booking.app.command.login_use_case import LoginUseCase
from src.service.flight_booking.app.query.list_reservations_use_case import (
    ListReservationsUseCase,
)
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.flight_booking.domain.entity.user_entity import UserEntity
from src.service.flight_booking.domain.value_object.itinerary import OneLeg
from src.service.flight_booking.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from test.service.flight_booking.flight_test_data import (
    CHICAGO,
    DEFAULT_PASSWORD,
    FakeUnitOfWork,
    make_flight,
)


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest.mark.unit
class TestCreateCustomer:
    @pytest.mark.asyncio
    async def test_creates_user_with_hashed_password(self, password_hasher):
        uow = FakeUnitOfWork()
        uow.users.get_by_username = AsyncMock(return_value=None)
        uow.users.create = AsyncMock(side_effect=lambda *, user: user)
        use_case = CreateCustomerUseCase(
            uow_factory=MagicMock(return_value=uow), password_hasher=password_hasher
        )

        user = await use_case.execute(username='alice', password=DEFAULT_PASSWORD, initial_balance=500)

        assert (user.username, user.balance) == ('alice', 500)
        assert user.hashed_password != DEFAULT_PASSWORD
        assert password_hasher.verify_password(
            plain_password=SecretStr(DEFAULT_PASSWORD),
            hashed_password=user.hashed_password,
        )
        assert uow.committed

    @pytest.mark.asyncio
    async def test_duplicate_username(self, password_hasher):
        uow = FakeUnitOfWork()
        uow.users.get_by_username = AsyncMock(return_value=UserEntity(username='alice'))
        use_case = CreateCustomerUseCase(
            uow_factory=MagicMock(return_value=uow), password_hasher=password_hasher
        )

        with pytest.raises(ConflictError) as exc_info:
            await use_case.execute(username='alice', password='other', initial_balance=10)

        assert exc_info.value.message == 'Failed to create user'
        uow.users.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_negative_initial_balance(self, password_hasher):
        factory = MagicMock()
        use_case = CreateCustomerUseCase(uow_factory=factory, password_hasher=password_hasher)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(username='alice', password='pw', initial_balance=-1)

        assert exc_info.value.message == 'Failed to create user'
        factory.assert_not_called()


@pytest.mark.unit
class TestLogin:
    @pytest.fixture
    def stored_user(self, password_hasher) -> UserEntity:
        user = UserEntity(username='alice', balance=100)
        user.set_password(DEFAULT_PASSWORD, password_hasher)
        return user

    def _use_case(self, password_hasher, user) -> LoginUseCase:
        uow = FakeUnitOfWork()
        uow.users.get_by_username = AsyncMock(return_value=user)
        return LoginUseCase(uow_factory=MagicMock(return_value=uow), password_hasher=password_hasher)

    @pytest.mark.asyncio
    async def test_login(self, password_hasher, stored_user):
        session = CustomerSession()

        username = await self._use_case(password_hasher, stored_user).execute(
            session=session, username='alice', password=DEFAULT_PASSWORD
        )

        assert username == 'alice'
        assert session.username == 'alice'

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_the_same(self, password_hasher, stored_user):
        wrong_password = self._use_case(password_hasher, stored_user)
        unknown_user = self._use_case(password_hasher, None)

        with pytest.raises(LoginError) as wrong:
            await wrong_password.execute(session=CustomerSession(), username='alice', password='nope')
        with pytest.raises(LoginError) as unknown:
            await unknown_user.execute(session=CustomerSession(), username='bob', password='nope')

        assert wrong.value.message == unknown.value.message == 'Login failed'

    @pytest.mark.asyncio
    async def test_failed_login_stays_logged_out(self, password_hasher, stored_user):
        session = CustomerSession()

        with pytest.raises(LoginError):
            await self._use_case(password_hasher, stored_user).execute(
                session=session, username='alice', password='nope'
            )

        assert not session.is_logged_in

    @pytest.mark.asyncio
    async def test_already_logged_in(self, password_hasher, stored_user):
        session = CustomerSession()
        session.log_in('alice')
        factory = MagicMock()

        with pytest.raises(AlreadyLoggedInError):
            await LoginUseCase(uow_factory=factory, password_hasher=password_hasher).execute(
                session=session, username='alice', password=DEFAULT_PASSWORD
            )

        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_clears_previous_search(self, password_hasher, stored_user):
        session = CustomerSession()
        session.itinerary_cache.replace([OneLeg(first=make_flight(1))])

        await self._use_case(password_hasher, stored_user).execute(
            session=session, username='alice', password=DEFAULT_PASSWORD
        )

        assert session.itinerary_cache.itineraries == ()


@pytest.mark.unit
class TestListReservations:
    @pytest.mark.asyncio
    async def test_lists_with_flights_resolved(self):
        leg1, leg2, direct = (
            make_flight(1, dest=CHICAGO),
            make_flight(2, origin=CHICAGO),
            make_flight(3, day=2),
        )
        uow = FakeUnitOfWork()
        uow.serve_flights(leg1, leg2, direct)
        uow.reservations.list_by_username = AsyncMock(
            return_value=[
                ReservationEntity(rid=1, username='alice', fid1=1, fid2=2, paid=True),
                ReservationEntity(rid=4, username='alice', fid1=3),
            ]
        )
        session = CustomerSession()
        session.log_in('alice')

        details = await ListReservationsUseCase(uow_factory=MagicMock(return_value=uow)).execute(
            session=session
        )

        assert [d.reservation.rid for d in details] == [1, 4]
        assert details[0].flights == (leg1, leg2)
        assert details[1].flights == (direct,)

    @pytest.mark.asyncio
    async def test_no_reservations(self):
        uow = FakeUnitOfWork()
        uow.reservations.list_by_username = AsyncMock(return_value=[])
        session = CustomerSession()
        session.log_in('alice')

        with pytest.raises(NoReservationsError) as exc_info:
            await ListReservationsUseCase(uow_factory=MagicMock(return_value=uow)).execute(
                session=session
            )

        assert exc_info.value.message == 'No reservations found'

    @pytest.mark.asyncio
    async def test_requires_login(self):
        with pytest.raises(NotLoggedInError) as exc_info:
            await ListReservationsUseCase(uow_factory=MagicMock()).execute(session=CustomerSession())

        assert exc_info.value.message == 'Cannot view reservations, not logged in'
