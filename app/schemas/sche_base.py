from typing import Optional, TypeVar, Generic

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ResponseSchemaBase(BaseModel):
    __abstract__ = True

    success: bool = True
    code: str = '200'
    message: str = ''

    def custom_response(self, success: bool, message: str, code: str = '200'):
        self.success = success
        self.code = code
        self.message = message
        return self

    def success_response(self):
        self.success = True
        self.code = '200'
        self.message = 'Success'
        return self


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    code: str = '200'
    message: str = ''
    data: Optional[T] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def custom_response(self, success: bool, message: str, data: T, code: str = '200'):
        self.success = success
        self.code = code
        self.message = message
        self.data = data
        return self

    def success_response(self, data: T):
        self.success = True
        self.code = '200'
        self.message = 'Success'
        self.data = data
        return self


class MetadataSchema(BaseModel):
    current_page: int
    page_size: int
    total_items: int
