"""
Per-client session state

A CustomerSession is owned by exactly one connected client (one interactive
shell, or one HTTP cookie) and is passed explicitly into every use case.

States:
    LoggedOut --login--> LoggedIn(username)

There is no logout; the session simply ends. The session also caches the most
recent search result. Each search replaces the cache and bumps its generation,
which invalidates every previously handed-out itinerary index.
"""

from typing import Optional, Sequence

import attrs

from src.platform.exception.exceptions import (
    AlreadyLoggedInError,
    NoSuchItineraryError,
    NotLoggedInError,
)
from src.service.flight_booking.domain.value_object.itinerary import Itinerary


@attrs.define
class ItineraryCache:
    itineraries: tuple[Itinerary, ...] = ()
    generation: int = 0

    def replace(self, itineraries: Sequence[Itinerary]) -> int:
        self.itineraries = tuple(itineraries)
        self.generation += 1
        return self.generation

    def clear(self) -> int:
        return self.replace(())

    def get(self, index: int, *, generation: Optional[int] = None) -> Itinerary:
        if generation is not None and generation != self.generation:
            raise NoSuchItineraryError(index)
        if not 0 <= index < len(self.itineraries):
            raise NoSuchItineraryError(index)
        return self.itineraries[index]


@attrs.define
class CustomerSession:
    session_id: str = ''
    username: Optional[str] = None
    itinerary_cache: ItineraryCache = attrs.field(factory=ItineraryCache)

    @property
    def is_logged_in(self) -> bool:
        return self.username is not None

    def ensure_logged_out(self) -> None:
        if self.is_logged_in:
            raise AlreadyLoggedInError()

    def require_username(self, message: str) -> str:
        """Return the logged-in username, or raise NotLoggedInError(message)."""
        if self.username is None:
            raise NotLoggedInError(message)
        return self.username

    def log_in(self, username: str) -> None:
        self.ensure_logged_out()
        self.username = username
        self.itinerary_cache.clear()
