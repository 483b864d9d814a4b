from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class UserModel(Base):
    __tablename__ = 'users'
    __table_args__ = (CheckConstraint('balance >= 0', name='ck_users_balance_non_negative'),)

    username: Mapped[str] = mapped_column(String(64), primary_key=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt hash
    balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f'<UserModel(username={self.username}, balance={self.balance})>'
