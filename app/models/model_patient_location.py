from sqlalchemy import Column, DateTime, Float, ForeignKey, Uuid
from app.models.model_base import Base
import uuid

class PatientLocation(Base):
    __tablename__ = "patient_location"

    location_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    patient_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    recorded_at = Column(DateTime, nullable=False)
