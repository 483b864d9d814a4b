import pytest

from src.platform.exception.exceptions import (
    AlreadyLoggedInError,
    NoSuchItineraryError,
    NotLoggedInError,
)
from src.service.flight_booking.domain.aggregate.customer_session import (
    CustomerSession,
    ItineraryCache,
)
from src.service.flight_booking.domain.value_object.itinerary import OneLeg
from test.service.flight_booking.flight_test_data import make_flight


@pytest.mark.unit
class TestCustomerSession:
    def test_starts_logged_out(self):
        session = CustomerSession()

        assert not session.is_logged_in
        with pytest.raises(NotLoggedInError) as exc_info:
            session.require_username('Cannot pay, not logged in')
        assert exc_info.value.message == 'Cannot pay, not logged in'

    def test_log_in(self):
        session = CustomerSession()

        session.log_in('alice')

        assert session.is_logged_in
        assert session.require_username('unused') == 'alice'

    def test_second_login_is_rejected(self):
        session = CustomerSession()
        session.log_in('alice')

        with pytest.raises(AlreadyLoggedInError) as exc_info:
            session.log_in('bob')

        assert exc_info.value.message == 'User already logged in'
        assert session.username == 'alice'

    def test_log_in_clears_itineraries(self):
        session = CustomerSession()
        session.itinerary_cache.replace([OneLeg(first=make_flight(1))])

        session.log_in('alice')

        with pytest.raises(NoSuchItineraryError):
            session.itinerary_cache.get(0)

    def test_sessions_do_not_share_cache(self):
        first, second = CustomerSession(), CustomerSession()
        first.itinerary_cache.replace([OneLeg(first=make_flight(1))])

        assert second.itinerary_cache.itineraries == ()


@pytest.mark.unit
class TestItineraryCache:
    def test_replace_bumps_generation(self):
        cache = ItineraryCache()

        assert cache.replace([OneLeg(first=make_flight(1))]) == 1
        assert cache.replace([]) == 2
        assert cache.clear() == 3

    def test_get_by_index(self):
        cache = ItineraryCache()
        itineraries = [OneLeg(first=make_flight(1)), OneLeg(first=make_flight(2))]
        generation = cache.replace(itineraries)

        assert cache.get(1) == itineraries[1]
        assert cache.get(0, generation=generation) == itineraries[0]

    @pytest.mark.parametrize('index', [-1, 2, 99])
    def test_out_of_range_index(self, index: int):
        cache = ItineraryCache()
        cache.replace([OneLeg(first=make_flight(1)), OneLeg(first=make_flight(2))])

        with pytest.raises(NoSuchItineraryError) as exc_info:
            cache.get(index)

        assert exc_info.value.message == f'No such itinerary {index}'

    def test_stale_generation(self):
        cache = ItineraryCache()
        stale = cache.replace([OneLeg(first=make_flight(1))])
        cache.replace([OneLeg(first=make_flight(2))])

        with pytest.raises(NoSuchItineraryError):
            cache.get(0, generation=stale)
