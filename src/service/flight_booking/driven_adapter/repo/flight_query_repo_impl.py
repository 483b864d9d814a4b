from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_flight_query_repo import IFlightQueryRepo
from src.service.flight_booking.domain.entity.flight_entity import FlightEntity
from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel


class FlightQueryRepoImpl(IFlightQueryRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_by_fid(self, *, fid: int) -> Optional[FlightEntity]:
        result = await self.session.execute(select(FlightModel).where(FlightModel.fid == fid))
        flight_model = result.scalar_one_or_none()
        if not flight_model:
            return None
        return self._model_to_entity(flight_model)

    @Logger.io
    async def search_direct(
        self, *, origin: str, destination: str, day: int, limit: int
    ) -> List[FlightEntity]:
        stmt = (
            select(FlightModel)
            .where(
                FlightModel.origin_city == origin,
                FlightModel.dest_city == destination,
                FlightModel.day_of_month == day,
                FlightModel.canceled.is_(False),
            )
            .order_by(FlightModel.actual_time, FlightModel.fid)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._model_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def search_indirect(
        self, *, origin: str, destination: str, day: int, limit: int
    ) -> List[tuple[FlightEntity, FlightEntity]]:
        f1 = aliased(FlightModel, name='f1')
        f2 = aliased(FlightModel, name='f2')
        stmt = (
            select(f1, f2)
            .where(
                f1.origin_city == origin,
                f1.dest_city == f2.origin_city,
                f2.dest_city == destination,
                f1.day_of_month == day,
                f2.day_of_month == day,
                f1.canceled.is_(False),
                f2.canceled.is_(False),
            )
            .order_by(f1.actual_time + f2.actual_time, f1.fid, f2.fid)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [
            (self._model_to_entity(first), self._model_to_entity(second))
            for first, second in result.all()
        ]

    @staticmethod
    def _model_to_entity(flight_model: FlightModel) -> FlightEntity:
        return FlightEntity(
            fid=flight_model.fid,
            day_of_month=flight_model.day_of_month,
            carrier_id=flight_model.carrier_id,
            flight_num=flight_model.flight_num,
            origin_city=flight_model.origin_city,
            dest_city=flight_model.dest_city,
            duration_minutes=flight_model.actual_time,
            capacity=flight_model.capacity,
            price=flight_model.price,
            canceled=flight_model.canceled,
        )
