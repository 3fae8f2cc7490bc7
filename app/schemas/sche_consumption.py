from typing import Any, Dict, Optional
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid import UUID

from app.helpers.enums import MarkStatus, SessionStatus
from app.scheduling import is_clock_time, schedule_to_payload
from app.schemas.sche_medication import MedicationSummary


class MarkConsumptionRequest(BaseModel):
    status: MarkStatus
    notes: Optional[str] = Field(None, max_length=1000)
    scheduled_time: Optional[str] = Field(None, description="Slot time (HH:MM) for daily fixed-time medications")

    @field_validator('scheduled_time')
    @classmethod
    def check_scheduled_time(cls, value):
        if value is not None and not is_clock_time(value):
            raise ValueError('scheduled_time must be HH:MM')
        return value


class SessionResponse(BaseModel):
    medication_id: UUID
    medication_name: str
    dosage: str
    description: Optional[str] = None
    photo_ref: Optional[str] = None
    schedule_type: str
    scheduled_date: date
    scheduled_time: Optional[str] = None
    status: SessionStatus
    is_taken: bool
    consumption_record_id: Optional[UUID] = None
    consumption_time: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def from_session(cls, session, medication, day: date) -> "SessionResponse":
        return cls(
            medication_id=medication.medication_id,
            medication_name=medication.name,
            dosage=medication.dosage,
            description=medication.description,
            photo_ref=medication.photo_ref,
            schedule_type=medication.schedule_definition.type.value,
            scheduled_date=day,
            scheduled_time=session.scheduled_time,
            status=session.status,
            is_taken=session.status == SessionStatus.TAKEN,
            consumption_record_id=session.consumption_record_id,
            consumption_time=session.consumption_time,
            notes=session.notes,
        )


class HistoryItemResponse(BaseModel):
    consumption_id: UUID
    medication_id: UUID
    patient_id: UUID
    status: str
    notes: Optional[str] = None
    consumed_at: datetime
    scheduled_date: date
    scheduled_time: Optional[str] = None
    medication: MedicationSummary
    schedule: Dict[str, Any]

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, record) -> "HistoryItemResponse":
        return cls(
            consumption_id=record.consumption_id,
            medication_id=record.medication_id,
            patient_id=record.patient_id,
            status=record.status,
            notes=record.notes,
            consumed_at=record.consumed_at,
            scheduled_date=record.scheduled_date,
            scheduled_time=record.scheduled_time,
            medication=MedicationSummary.model_validate(record.medication),
            schedule=schedule_to_payload(record.medication.schedule_definition),
        )
