from typing import Optional
from pydantic import BaseModel, ConfigDict
from datetime import datetime
from uuid import UUID

class NotificationBase(BaseModel):
    title: str
    message: str
    type: str
    is_read: bool
    created_at: datetime

class NotificationResponse(NotificationBase):
    notification_id: UUID
    user_id: UUID
    medication_id: Optional[UUID] = None
    scheduled_time: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
