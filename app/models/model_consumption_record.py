from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, func, Uuid
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class ConsumptionRecord(Base):
    __tablename__ = "consumption_record"

    consumption_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    medication_id = Column(Uuid(as_uuid=True), ForeignKey("medication.medication_id", ondelete="CASCADE"), nullable=False)
    patient_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False)
    notes = Column(Text)
    consumed_at = Column(DateTime, nullable=False)
    # calendar day of the slot; with scheduled_time it identifies the slot
    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_time = Column(String(5))
    created_at = Column(DateTime, default=func.now())

    medication = relationship("Medication", back_populates="consumption_records", lazy="joined")
