import logging
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette import status

from app.core.security import decode_access_token
from app.db.base import get_db
from app.helpers.enums import UserRole
from app.helpers.exception_handler import CustomException, AuthorizationError
from app.models.model_user import User
from app.schemas.sche_token import TokenPayload
from app.schemas.sche_user import Principal

logger = logging.getLogger(__name__)

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization',
    auto_error=False
)


def login_required(http_authorization_credentials=Depends(reusable_oauth2),
                   db: Session = Depends(get_db)) -> User:
    if http_authorization_credentials is None:
        raise CustomException(http_code=status.HTTP_401_UNAUTHORIZED, code='401', message="Not authenticated")
    try:
        payload = decode_access_token(http_authorization_credentials.credentials)
        token_data = TokenPayload(**payload)
    except (jwt.PyJWTError, ValidationError) as e:
        logger.error(f"Credential validation failed: {e}")
        raise CustomException(
            http_code=status.HTTP_401_UNAUTHORIZED,
            code='401',
            message="Could not validate credentials"
        )
    try:
        user_id = UUID(token_data.user_id)
    except (TypeError, ValueError):
        raise CustomException(http_code=401, code='401', message="Could not validate credentials")
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        logger.error(f"User not found: {token_data.user_id}")
        raise CustomException(http_code=401, code='401', message="User not found")
    if not user.is_active:
        raise CustomException(http_code=401, code='401', message="Inactive user")
    return user


def get_current_principal(user: User = Depends(login_required)) -> Principal:
    return Principal(id=user.user_id, role=UserRole(user.role))


class PermissionRequired:
    """Dependency restricting an endpoint to the given roles."""

    def __init__(self, *roles: UserRole):
        self.roles = roles

    def __call__(self, principal: Principal = Depends(get_current_principal)) -> Principal:
        if self.roles and principal.role not in self.roles:
            raise AuthorizationError(
                message=f"Role {principal.role.value} can not access this api"
            )
        return principal
