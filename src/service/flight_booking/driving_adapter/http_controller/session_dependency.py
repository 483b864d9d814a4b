from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request, Response

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.driving_adapter.http_controller.session_registry import (
    SessionRegistry,
)


@inject
async def get_customer_session(
    request: Request,
    response: Response,
    session_registry: SessionRegistry = Depends(Provide[Container.session_registry]),
) -> CustomerSession:
    """Resolve the caller's session from its cookie, minting one on first contact."""
    session_id: Optional[str] = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session = session_registry.get_or_create(session_id)
    if session.session_id != session_id:
        response.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session.session_id,
            httponly=True,
            samesite='lax',
            secure=False,  # Set to True in production
        )
    return session
