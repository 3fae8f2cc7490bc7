from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, func, Uuid
from sqlalchemy.orm import relationship
from app.models.model_base import Base
from app.scheduling import parse_schedule
import uuid

class Medication(Base):
    __tablename__ = "medication"

    medication_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    patient_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    prescriber_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    dosage = Column(String(255), nullable=False)
    schedule = Column(Text)
    description = Column(Text)
    photo_ref = Column(String(255))
    notify_family = Column(Boolean, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    consumption_records = relationship("ConsumptionRecord", back_populates="medication",
                                       cascade="all, delete-orphan")

    @property
    def schedule_definition(self):
        return parse_schedule(self.schedule)
