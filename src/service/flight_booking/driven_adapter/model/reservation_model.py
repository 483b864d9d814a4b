from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservations'
    # AUTOINCREMENT keeps SQLite from reusing the rid of a deleted max row
    __table_args__ = {'sqlite_autoincrement': True}

    rid: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(64), ForeignKey('users.username'), nullable=False, index=True
    )
    fid1: Mapped[int] = mapped_column(Integer, ForeignKey('flights.fid'), nullable=False, index=True)
    fid2: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey('flights.fid'), nullable=True, index=True
    )
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f'<ReservationModel(rid={self.rid}, username={self.username}, paid={self.paid})>'
