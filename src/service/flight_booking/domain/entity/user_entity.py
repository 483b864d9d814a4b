import attrs
from pydantic import SecretStr

from src.platform.exception.exceptions import LoginError, ValidationError
from src.service.flight_booking.app.interface.i_password_hasher import IPasswordHasher


@attrs.define
class UserEntity:
    username: str
    hashed_password: str = attrs.field(default='', repr=False)  # Hide from repr for security
    balance: int = 0

    @staticmethod
    def validate_initial_balance(initial_balance: int) -> None:
        if initial_balance < 0:
            raise ValidationError('Failed to create user')

    @staticmethod
    def validate_credentials(
        user: 'UserEntity | None', *, plain_password: str, password_hasher: IPasswordHasher
    ) -> 'UserEntity':
        """Unknown user and wrong password fail the same way."""
        if user is None or not password_hasher.verify_password(
            plain_password=SecretStr(plain_password), hashed_password=user.hashed_password
        ):
            raise LoginError()
        return user

    def set_password(self, plain_password: str, password_hasher: IPasswordHasher) -> None:
        self.hashed_password = password_hasher.hash_password(plain_password=SecretStr(plain_password))

    def withdraw(self, amount: int) -> 'UserEntity':
        return attrs.evolve(self, balance=self.balance - amount)

    def deposit(self, amount: int) -> 'UserEntity':
        return attrs.evolve(self, balance=self.balance + amount)
