from typing import List
from fastapi import Depends
from app.helpers.exception_handler import NotFoundError
from app.repository.repo_notification import NotificationRepository
from app.schemas.sche_notification import NotificationResponse
from app.schemas.sche_user import Principal

class NotificationService:
    def __init__(self, notification_repo: NotificationRepository = Depends()):
        self.notification_repo = notification_repo

    def get_user_notifications(self, principal: Principal) -> List[NotificationResponse]:
        notifications = self.notification_repo.get_by_user_id(principal.id)
        return [NotificationResponse.model_validate(n) for n in notifications]

    def mark_read(self, principal: Principal, notification_id) -> NotificationResponse:
        notification = self.notification_repo.get_by_id(notification_id)
        if not notification or notification.user_id != principal.id:
            raise NotFoundError(message='Notification not found')
        notification.is_read = True
        return NotificationResponse.model_validate(self.notification_repo.update(notification))
