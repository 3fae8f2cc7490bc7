import logging
from typing import Optional, Generic, TypeVar, List, Callable

from pydantic import BaseModel, ConfigDict, conint
from sqlalchemy import asc, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query

from app.schemas.sche_base import MetadataSchema
from app.helpers.exception_handler import StorageError

T = TypeVar("T")

logger = logging.getLogger(__name__)


DEFAULT_SORT_BY = 'consumed_at'


class PaginationParams(BaseModel):
    page_size: Optional[conint(gt=0, lt=1001)] = 10
    page: Optional[conint(gt=0)] = 1
    sort_by: Optional[str] = DEFAULT_SORT_BY
    order: Optional[str] = 'desc'


class Page(BaseModel, Generic[T]):
    code: str = ''
    message: str = ''
    data: List[T]
    metadata: MetadataSchema

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def create(cls, code: str, message: str, data: List[T], metadata: MetadataSchema) -> "Page[T]":
        return cls(
            code=code,
            message=message,
            data=data,
            metadata=metadata
        )


def paginate(model, query: Query, params: Optional[PaginationParams],
             transform: Callable = None) -> Page:
    code = '200'
    message = 'Success'
    params = params or PaginationParams()

    try:
        total = query.count()

        columns = model.__table__.columns
        sort_by = params.sort_by if params.sort_by and params.sort_by in columns else DEFAULT_SORT_BY
        if params.order and sort_by in columns:
            direction = desc if params.order == 'desc' else asc
            query = query.order_by(direction(columns[sort_by]))

        data = query.limit(params.page_size).offset(params.page_size * (params.page-1)).all()

        metadata = MetadataSchema(
            current_page=params.page,
            page_size=params.page_size,
            total_items=total
        )

    except SQLAlchemyError as e:
        logger.error(f"paginate error: {str(e)}", exc_info=True)
        raise StorageError(message=str(e))

    if transform:
        data = [transform(item) for item in data]
    return Page.create(code, message, data, metadata)
