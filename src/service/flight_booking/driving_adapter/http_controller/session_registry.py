"""
Session Registry

Maps HTTP session cookies to CustomerSession objects. Sessions live in this
process only; a restart logs every client out.

The registry is bounded: a session idle for longer than the idle timeout is
dropped, and beyond the size cap the least recently used session goes first.
A dropped session's cookie simply mints a new, logged-out session.
"""

from collections import OrderedDict
import secrets
import time
from typing import Callable, Optional

import attrs

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession


@attrs.define
class _Entry:
    session: CustomerSession
    last_seen: float


class SessionRegistry:
    def __init__(
        self,
        *,
        max_sessions: Optional[int] = None,
        idle_timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_sessions = settings.SESSION_MAX_ACTIVE if max_sessions is None else max_sessions
        self.idle_timeout_seconds = (
            settings.SESSION_IDLE_TIMEOUT_SECONDS
            if idle_timeout_seconds is None
            else idle_timeout_seconds
        )
        self._clock = clock
        # Ordered by last access, oldest first
        self._entries: OrderedDict[str, _Entry] = OrderedDict()

    def get_or_create(self, session_id: Optional[str]) -> CustomerSession:
        now = self._clock()
        self._evict_idle(now)

        entry = self._entries.get(session_id) if session_id else None
        if entry is not None:
            entry.last_seen = now
            self._entries.move_to_end(session_id)  # type: ignore[arg-type]
            return entry.session

        session = CustomerSession(session_id=secrets.token_urlsafe(24))
        self._entries[session.session_id] = _Entry(session=session, last_seen=now)
        while len(self._entries) > self.max_sessions:
            self._entries.popitem(last=False)
        Logger.base.debug(f'🍪 [SESSION] New session ({len(self._entries)} active)')
        return session

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_idle(self, now: float) -> None:
        while self._entries:
            oldest = next(iter(self._entries.values()))
            if now - oldest.last_seen <= self.idle_timeout_seconds:
                return
            self._entries.popitem(last=False)
