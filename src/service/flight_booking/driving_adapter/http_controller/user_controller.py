from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.flight_booking.app.command.create_customer_use_case import (
    CreateCustomerUseCase,
)
from src.service.flight_booking.app.command.login_use_case import LoginUseCase
from src.service.flight_booking.domain.aggregate.customer_session import CustomerSession
from src.service.flight_booking.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    UserResponse,
)
from src.service.flight_booking.driving_adapter.http_controller.session_dependency import (
    get_customer_session,
)
from src.service.flight_booking.driving_adapter.presenter import response_text


router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_user(
    request: CreateUserRequest,
    use_case: CreateCustomerUseCase = Depends(Provide[Container.create_customer_use_case]),
) -> UserResponse:
    user = await use_case.execute(
        username=request.username,
        password=request.password.get_secret_value(),
        initial_balance=request.initial_balance,
    )
    return UserResponse(message=response_text.created_user(user.username), username=user.username)


@router.post('/login', response_model=UserResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    session: CustomerSession = Depends(get_customer_session),
    use_case: LoginUseCase = Depends(Provide[Container.login_use_case]),
) -> UserResponse:
    username = await use_case.execute(
        session=session,
        username=request.username,
        password=request.password.get_secret_value(),
    )
    return UserResponse(message=response_text.logged_in(username), username=username)
