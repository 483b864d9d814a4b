from pydantic import BaseModel, Field, SecretStr

from src.platform.constant.store_limit import STORE_INT_MAX


class CreateUserRequest(BaseModel):
    username: str
    password: SecretStr
    initial_balance: int = Field(..., le=STORE_INT_MAX)

    model_config = {
        'json_schema_extra': {
            'example': {'username': 'alice', 'password': 'P@ssw0rd', 'initial_balance': 500}
        }
    }


class LoginRequest(BaseModel):
    username: str
    password: SecretStr


class UserResponse(BaseModel):
    message: str
    username: str
