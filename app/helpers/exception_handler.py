import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from app.schemas.sche_base import ResponseSchemaBase

logger = logging.getLogger(__name__)


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


class ValidationError(CustomException):
    """Malformed input, rejected before any write."""

    def __init__(self, message: str = 'Invalid input'):
        super().__init__(http_code=400, code='400', message=message)


class AuthorizationError(CustomException):
    """The principal lacks the relation required for the operation."""

    def __init__(self, message: str = 'Not authorized'):
        super().__init__(http_code=403, code='403', message=message)


class NotFoundError(CustomException):
    def __init__(self, message: str = 'Not found'):
        super().__init__(http_code=404, code='404', message=message)


class ConflictError(CustomException):
    def __init__(self, message: str = 'Already exists'):
        super().__init__(http_code=409, code='409', message=message)


class StorageError(CustomException):
    def __init__(self, message: str = 'Storage failure'):
        super().__init__(http_code=500, code='500', message=message)


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(False, exc.message, exc.code))
    )


def get_message_validation(exc: RequestValidationError) -> str:
    return ', '.join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Request validation failed on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(False, get_message_validation(exc), '400'))
    )
