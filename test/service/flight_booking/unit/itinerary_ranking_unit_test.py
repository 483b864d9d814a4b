"""
Unit tests for itinerary ranking

Ranking is a stable sort on total duration over direct-then-indirect
candidates, so ties keep the order the store produced them in.
"""

import pytest

from src.service.flight_booking.domain.value_object.itinerary import (
    OneLeg,
    TwoLeg,
    rank_itineraries,
    total_price,
)
from test.service.flight_booking.flight_test_data import CHICAGO, make_flight


@pytest.mark.unit
class TestRankItineraries:
    def test_sorts_by_total_duration(self):
        slow = make_flight(1, duration=400)
        fast = make_flight(2, duration=200)
        leg1 = make_flight(3, dest=CHICAGO, duration=100)
        leg2 = make_flight(4, origin=CHICAGO, duration=150)

        ranked = rank_itineraries([fast, slow], [(leg1, leg2)])

        assert [i.total_duration for i in ranked] == [200, 250, 400]
        assert ranked[1] == TwoLeg(first=leg1, second=leg2)

    def test_equal_duration_direct_precedes_indirect(self):
        direct = make_flight(9, duration=300)
        leg1 = make_flight(1, dest=CHICAGO, duration=100)
        leg2 = make_flight(2, origin=CHICAGO, duration=200)

        ranked = rank_itineraries([direct], [(leg1, leg2)])

        assert isinstance(ranked[0], OneLeg)
        assert isinstance(ranked[1], TwoLeg)

    def test_equal_duration_keeps_store_order_within_group(self):
        # Store already ordered these by (duration, fid)
        a, b, c = make_flight(5, duration=250), make_flight(7, duration=250), make_flight(8, duration=250)

        ranked = rank_itineraries([a, b, c], [])

        assert [i.first.fid for i in ranked] == [5, 7, 8]

    def test_indirect_ties_keep_fid_order(self):
        pairs = [
            (make_flight(1, dest=CHICAGO, duration=100), make_flight(4, origin=CHICAGO, duration=100)),
            (make_flight(1, dest=CHICAGO, duration=100), make_flight(6, origin=CHICAGO, duration=100)),
            (make_flight(2, dest=CHICAGO, duration=50), make_flight(3, origin=CHICAGO, duration=150)),
        ]

        ranked = rank_itineraries([], pairs)

        assert [(i.first.fid, i.second.fid) for i in ranked] == [(1, 4), (1, 6), (2, 3)]

    def test_empty_candidates(self):
        assert rank_itineraries([], []) == []


@pytest.mark.unit
class TestItineraryVariants:
    def test_one_leg(self):
        flight = make_flight(1, day=12, duration=320)
        itinerary = OneLeg(first=flight)

        assert itinerary.flights == (flight,)
        assert itinerary.total_duration == 320
        assert itinerary.day == 12

    def test_two_leg_day_comes_from_first_leg(self):
        leg1 = make_flight(1, day=3, dest=CHICAGO, duration=100)
        leg2 = make_flight(2, day=4, origin=CHICAGO, duration=120)
        itinerary = TwoLeg(first=leg1, second=leg2)

        assert itinerary.flights == (leg1, leg2)
        assert itinerary.total_duration == 220
        assert itinerary.day == 3

    def test_total_price(self):
        assert total_price([make_flight(1, price=120), make_flight(2, price=80)]) == 200
        assert total_price([]) == 0
