"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.flight_booking.driving_adapter.http_controller import (
    flight_controller,
    reservation_controller,
    session_dependency,
    user_controller,
)


WIRE_MODULES: list[ModuleType] = [
    session_dependency,
    user_controller,
    flight_controller,
    reservation_controller,
]
