from typing import List, Optional

from sqlalchemy import delete, func, or_, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.interface.i_reservation_repo import IReservationRepo
from src.service.flight_booking.domain.entity.reservation_entity import ReservationEntity
from src.service.flight_booking.driven_adapter.model.reservation_model import ReservationModel


class ReservationRepoImpl(IReservationRepo):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create(self, *, username: str, fid1: int, fid2: Optional[int]) -> int:
        reservation_model = ReservationModel(username=username, fid1=fid1, fid2=fid2, paid=False)
        self.session.add(reservation_model)
        await self.session.flush()
        return reservation_model.rid

    @Logger.io
    async def count_by_flight(self, *, fid: int) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(ReservationModel)
            .where(or_(ReservationModel.fid1 == fid, ReservationModel.fid2 == fid))
        )
        return result.scalar_one()

    @Logger.io
    async def list_by_username(self, *, username: str) -> List[ReservationEntity]:
        result = await self.session.execute(
            select(ReservationModel)
            .where(ReservationModel.username == username)
            .order_by(ReservationModel.rid)
        )
        return [self._model_to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get(self, *, username: str, rid: int) -> Optional[ReservationEntity]:
        result = await self.session.execute(
            select(ReservationModel).where(
                ReservationModel.rid == rid, ReservationModel.username == username
            )
        )
        reservation_model = result.scalar_one_or_none()
        if not reservation_model:
            return None
        return self._model_to_entity(reservation_model)

    @Logger.io
    async def mark_paid(self, *, rid: int) -> None:
        await self.session.execute(
            update(ReservationModel).where(ReservationModel.rid == rid).values(paid=True)
        )

    @Logger.io
    async def delete(self, *, rid: int) -> None:
        await self.session.execute(delete(ReservationModel).where(ReservationModel.rid == rid))

    @Logger.io
    async def delete_all_and_restart_ids(self) -> None:
        dialect = self.session.get_bind().dialect.name
        if dialect == 'postgresql':
            await self.session.execute(
                text(f'TRUNCATE TABLE {ReservationModel.__tablename__} RESTART IDENTITY')
            )
            return

        await self.session.execute(delete(ReservationModel))
        if dialect == 'sqlite':
            await self.session.execute(
                text('DELETE FROM sqlite_sequence WHERE name = :name'),
                {'name': ReservationModel.__tablename__},
            )

    @staticmethod
    def _model_to_entity(reservation_model: ReservationModel) -> ReservationEntity:
        return ReservationEntity(
            rid=reservation_model.rid,
            username=reservation_model.username,
            fid1=reservation_model.fid1,
            fid2=reservation_model.fid2,
            paid=reservation_model.paid,
        )
