from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class FlightModel(Base):
    __tablename__ = 'flights'
    __table_args__ = (
        Index('ix_flights_route_day', 'origin_city', 'dest_city', 'day_of_month'),
        Index('ix_flights_origin_day', 'origin_city', 'day_of_month'),
    )

    fid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    day_of_month: Mapped[int] = mapped_column(Integer, nullable=False)
    carrier_id: Mapped[str] = mapped_column(String(7), nullable=False)
    flight_num: Mapped[str] = mapped_column(String(10), nullable=False)
    origin_city: Mapped[str] = mapped_column(String(34), nullable=False)
    dest_city: Mapped[str] = mapped_column(String(34), nullable=False)
    actual_time: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    canceled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f'<FlightModel(fid={self.fid}, {self.origin_city}->{self.dest_city}, day={self.day_of_month})>'
