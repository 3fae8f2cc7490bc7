import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import EmailStr, BaseModel

from app.core.security import create_access_token
from app.helpers.exception_handler import CustomException
from app.schemas.sche_base import DataResponse
from app.schemas.sche_token import Token
from app.schemas.sche_user import UserItemResponse, UserRegisterRequest
from app.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


class LoginRequest(BaseModel):
    username: EmailStr
    password: str


@router.post('/login', response_model=DataResponse[Token])
def login_access_token(form_data: LoginRequest, user_service: UserService = Depends()):
    user = user_service.authenticate(email=form_data.username, password=form_data.password)
    if not user:
        raise CustomException(http_code=400, code='400', message='Incorrect email or password')
    elif not user.is_active:
        raise CustomException(http_code=401, code='401', message='Inactive user')

    logger.info(f"User {user.user_id} logged in")
    return DataResponse().success_response({
        'access_token': create_access_token(user_id=user.user_id, role=user.role),
        'user_id': user.user_id,
        'role': user.role
    })


@router.post('/register', response_model=DataResponse[UserItemResponse])
def register(register_data: UserRegisterRequest, user_service: UserService = Depends()) -> Any:
    register_user = user_service.register_user(register_data)
    return DataResponse().success_response(data=register_user)
