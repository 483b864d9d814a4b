class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


# Authentication / session state


class AuthError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 401) -> None:
        super().__init__(message, status_code)


class NotLoggedInError(AuthError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class AlreadyLoggedInError(AuthError):
    def __init__(self, message: str = 'User already logged in') -> None:
        super().__init__(message, 409)


class LoginError(AuthError):
    def __init__(self, message: str = 'Login failed') -> None:
        super().__init__(message, 401)


# Lookups


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class NoSuchItineraryError(NotFoundError):
    def __init__(self, itinerary_id: int) -> None:
        self.itinerary_id = itinerary_id
        super().__init__(f'No such itinerary {itinerary_id}')


class NoFlightsError(NotFoundError):
    def __init__(self) -> None:
        super().__init__('No flights match your selection')


class NoReservationsError(NotFoundError):
    def __init__(self) -> None:
        super().__init__('No reservations found')


class ReservationNotFoundError(NotFoundError):
    pass


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


# Business rules, detected inside a transaction


class BusinessRuleViolation(CustomBaseError):
    def __init__(self, message: str, status_code: int = 409) -> None:
        super().__init__(message, status_code)


class SameDayConflictError(BusinessRuleViolation):
    def __init__(self) -> None:
        super().__init__('You cannot book two flights in the same day')


class BookingFailedError(BusinessRuleViolation):
    def __init__(self) -> None:
        super().__init__('Booking failed')


class InsufficientFundsError(BusinessRuleViolation):
    def __init__(self, *, balance: int, cost: int) -> None:
        self.balance = balance
        self.cost = cost
        super().__init__(f'User has only {balance} in account but itinerary costs {cost}', 402)


class StoreError(CustomBaseError):
    """Transaction conflict, timeout or connectivity failure; message is the generic op failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)
