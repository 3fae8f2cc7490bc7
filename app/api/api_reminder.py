import logging
import secrets
from datetime import date, datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Header, Query

from app.core.config import settings
from app.helpers.clock import to_local_naive
from app.helpers.exception_handler import AuthorizationError
from app.schemas.sche_base import DataResponse
from app.schemas.sche_reminder import ReminderEventResponse
from app.services.srv_reminder import ReminderService

logger = logging.getLogger(__name__)
router = APIRouter()


def scheduler_key_required(x_scheduler_key: Optional[str] = Header(None)) -> None:
    if not settings.SCHEDULER_API_KEY or not x_scheduler_key \
            or not secrets.compare_digest(x_scheduler_key, settings.SCHEDULER_API_KEY):
        logger.warning("Rejected reminder trigger call with a missing or invalid scheduler key")
        raise AuthorizationError(message='Invalid scheduler key')


@router.get('/due', dependencies=[Depends(scheduler_key_required)],
            response_model=DataResponse[List[ReminderEventResponse]])
def get_due_reminders(
    day: Optional[date] = Query(None),
    as_of: Optional[datetime] = Query(None),
    window_minutes: int = Query(1, gt=0, le=1440),
    reminder_service: ReminderService = Depends()
) -> Any:
    """
    Reminders due in the window ending at ``as_of``, without sending them.
    """
    as_of = to_local_naive(as_of) or reminder_service.clock()
    events = reminder_service.due_reminders(day or as_of.date(), as_of, window_minutes)
    return DataResponse().success_response(data=[ReminderEventResponse.from_event(e) for e in events])


@router.post('/dispatch', dependencies=[Depends(scheduler_key_required)],
             response_model=DataResponse[List[ReminderEventResponse]])
def dispatch_due_reminders(
    as_of: Optional[datetime] = Query(None),
    window_minutes: int = Query(1, gt=0, le=1440),
    reminder_service: ReminderService = Depends()
) -> Any:
    """
    Find and deliver the reminders due in the window ending at ``as_of``.
    """
    events = reminder_service.run_once(as_of=as_of, window_minutes=window_minutes)
    return DataResponse().success_response(data=[ReminderEventResponse.from_event(e) for e in events])
