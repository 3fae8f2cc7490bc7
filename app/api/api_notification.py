from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends

from app.helpers.login_manager import get_current_principal
from app.schemas.sche_base import DataResponse
from app.schemas.sche_notification import NotificationResponse
from app.schemas.sche_user import Principal
from app.services.srv_notification import NotificationService

router = APIRouter()

@router.get('', response_model=DataResponse[List[NotificationResponse]])
def get_notifications(
    notification_service: NotificationService = Depends(),
    principal: Principal = Depends(get_current_principal)
) -> Any:
    notifications = notification_service.get_user_notifications(principal)
    return DataResponse().success_response(data=notifications)

@router.put('/{notification_id}/read', response_model=DataResponse[NotificationResponse])
def mark_notification_read(
    notification_id: UUID,
    notification_service: NotificationService = Depends(),
    principal: Principal = Depends(get_current_principal)
) -> Any:
    return DataResponse().success_response(data=notification_service.mark_read(principal, notification_id))
