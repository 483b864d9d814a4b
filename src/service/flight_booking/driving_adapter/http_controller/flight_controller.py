from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query

from src.platform.config.di import Container
from src.platform.constant.store_limit import STORE_INT_MAX
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.query.search_itineraries_use_case import (
    SearchItinerariesUseCase,
)
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.driving_adapter.http_controller.schema.flight_schema import (
    ItineraryResponse,
    SearchResponse,
)
from src.service.flight_booking.driving_adapter.http_controller.session_dependency import (
    get_customer_session,
)
from src.service.flight_booking.driving_adapter.presenter import response_text


router = APIRouter()


@router.get('/search', response_model=SearchResponse)
@Logger.io
@inject
async def search_flights(
    origin: str = Query(..., description='Origin city, e.g. "Seattle WA"'),
    destination: str = Query(..., description='Destination city'),
    day: int = Query(..., description='Day of month (1-30)'),
    direct_only: bool = Query(False),
    limit: int = Query(..., le=STORE_INT_MAX, description='Maximum number of itineraries'),
    session: CustomerSession = Depends(get_customer_session),
    use_case: SearchItinerariesUseCase = Depends(Provide[Container.search_itineraries_use_case]),
) -> SearchResponse:
    result = await use_case.execute(
        session=session,
        origin=origin,
        destination=destination,
        day=day,
        direct_only=direct_only,
        limit=limit,
    )
    return SearchResponse(
        message=response_text.search_result(result),
        generation=result.generation,
        itineraries=[
            ItineraryResponse.from_itinerary(i, itinerary)
            for i, itinerary in enumerate(result.itineraries)
        ],
    )
