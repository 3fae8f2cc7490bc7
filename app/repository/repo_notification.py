from typing import List, Optional
from app.models.model_notification import Notification
from app.repository.repo_base import BaseRepository

class NotificationRepository(BaseRepository):

    def get_by_user_id(self, user_id) -> List[Notification]:
        return self.db.query(Notification).filter(
            Notification.user_id == user_id
        ).order_by(Notification.created_at.desc()).all()

    def get_by_id(self, notification_id) -> Optional[Notification]:
        return self.db.query(Notification).filter(Notification.notification_id == notification_id).first()

    def create_many(self, notifications: List[Notification]) -> List[Notification]:
        self.db.add_all(notifications)
        self._commit('create notifications')
        return notifications

    def update(self, notification: Notification) -> Notification:
        self._commit('update notification')
        self.db.refresh(notification)
        return notification
