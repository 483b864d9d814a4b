"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.flight_booking.driven_adapter.model.flight_model import FlightModel
from src.service.flight_booking.driven_adapter.model.reservation_model import ReservationModel
from src.service.flight_booking.driven_adapter.model.user_model import UserModel

__all__ = [
    'FlightModel',
    'ReservationModel',
    'UserModel',
]
