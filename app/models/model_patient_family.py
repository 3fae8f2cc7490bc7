from sqlalchemy import Column, DateTime, ForeignKey, func, Uuid
from app.models.model_base import Base

class PatientFamily(Base):
    __tablename__ = "patient_family"

    patient_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    family_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    assigned_at = Column(DateTime, default=func.now())
