from src.platform.database.transaction import UnitOfWorkFactory, run_in_transaction
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NoFlightsError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.dto import SearchResult
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.domain.value_object.itinerary import (
    Itinerary,
    rank_itineraries,
)


SEARCH_FAILED = 'Failed to search'
MIN_DAY, MAX_DAY = 1, 30


class SearchItinerariesUseCase:
    """
    Itinerary search: up to ``limit`` direct flights, topped up with same-day
    one-stop connections unless ``direct_only``, then ranked by total duration.

    Every call replaces the session's itinerary cache, so indices handed out
    by an earlier search stop working even if this one fails.
    """

    def __init__(self, *, uow_factory: UnitOfWorkFactory) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def execute(
        self,
        *,
        session: CustomerSession,
        origin: str,
        destination: str,
        day: int,
        direct_only: bool,
        limit: int,
    ) -> SearchResult:
        cache = session.itinerary_cache
        cache.clear()

        if not MIN_DAY <= day <= MAX_DAY or limit <= 0:
            raise ValidationError(SEARCH_FAILED)

        async def _search(uow: AbstractUnitOfWork) -> list[Itinerary]:
            direct = await uow.flights.search_direct(
                origin=origin, destination=destination, day=day, limit=limit
            )
            indirect = []
            remaining = limit - len(direct)
            if not direct_only and remaining > 0:
                indirect = await uow.flights.search_indirect(
                    origin=origin, destination=destination, day=day, limit=remaining
                )
            return rank_itineraries(direct, indirect)

        itineraries = await run_in_transaction(
            self.uow_factory, _search, failure_message=SEARCH_FAILED
        )
        generation = cache.replace(itineraries)
        if not itineraries:
            raise NoFlightsError()
        return SearchResult(generation=generation, itineraries=tuple(itineraries))
