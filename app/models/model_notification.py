from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, func, Uuid
from app.models.model_base import Base
import uuid

class Notification(Base):
    __tablename__ = "notification"

    notification_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    medication_id = Column(Uuid(as_uuid=True), ForeignKey("medication.medication_id", ondelete="CASCADE"))
    scheduled_time = Column(String(5))
    type = Column(String(50), nullable=False)
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
