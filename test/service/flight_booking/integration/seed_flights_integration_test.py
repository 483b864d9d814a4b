from pathlib import Path

import pytest

from scripts.seed_flights import read_flights, seed_flights
from src.platform.constant.path import FLIGHTS_CSV_PATH
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from test.service.flight_booking.booking_service import BookingService


HEADERLESS_ROWS = (
    '101,7,3,5,AS,24,Seattle WA,WA,Boston MA,MA,3,15,-5,0,315,2496,9,499\n'
    '102,7,3,5,AS,26,Seattle WA,WA,Boston MA,MA,0,0,0,1,,2496,9,499\n'
)


class TestReadFlights:
    def test_headerless_dataset_export(self, tmp_path: Path):
        csv_path = tmp_path / 'flights.csv'
        csv_path.write_text(HEADERLESS_ROWS)

        flights = list(read_flights(csv_path))

        assert [f.fid for f in flights] == [101, 102]
        assert flights[0].day_of_month == 3
        assert flights[0].origin_city == 'Seattle WA'
        assert flights[0].dest_city == 'Boston MA'
        assert (flights[0].actual_time, flights[0].capacity, flights[0].price) == (315, 9, 499)
        assert not flights[0].canceled
        assert flights[1].canceled
        assert flights[1].actual_time == 0

    def test_missing_columns(self, tmp_path: Path):
        csv_path = tmp_path / 'flights.csv'
        csv_path.write_text('fid,day_of_month\n1,1\n')

        with pytest.raises(ValueError, match='missing columns'):
            list(read_flights(csv_path))


class TestSeedFlights:
    @pytest.mark.asyncio
    async def test_bundled_sample_is_searchable(self, uow_factory):
        count = await seed_flights(FLIGHTS_CSV_PATH)

        assert count == len(FLIGHTS_CSV_PATH.read_text().strip().splitlines()) - 1
        result = await BookingService(uow_factory).search_day(
            CustomerSession(), 1, direct_only=False, limit=10
        )
        assert result.itineraries

    @pytest.mark.asyncio
    async def test_reseeding_replaces_by_fid(self, uow_factory, tmp_path: Path):
        csv_path = tmp_path / 'flights.csv'
        csv_path.write_text(HEADERLESS_ROWS)
        await seed_flights(csv_path)

        csv_path.write_text(HEADERLESS_ROWS.replace(',9,499\n', ',9,450\n', 1))
        assert await seed_flights(csv_path) == 2

        async with uow_factory() as uow:
            flight = await uow.flights.get_by_fid(fid=101)
        assert flight.price == 450
