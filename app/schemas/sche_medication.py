from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID

from app.scheduling import schedule_to_payload


class MedicationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=255)
    schedule: Dict[str, Any] = Field(..., description="Schedule object keyed by 'type'")
    description: Optional[str] = None
    photo_ref: Optional[str] = None
    notify_family: bool = True

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Amlodipine",
                "dosage": "5mg",
                "schedule": {"type": "daily_fixed_times", "times": ["08:00", "20:00"]},
                "description": "Take after breakfast and dinner",
                "photo_ref": None,
                "notify_family": True
            }
        }
    )


class MedicationCreateRequest(MedicationBase):
    pass


class MedicationUpdateRequest(MedicationBase):
    pass


class MedicationResponse(BaseModel):
    medication_id: UUID
    patient_id: UUID
    prescriber_id: UUID
    name: str
    dosage: str
    schedule: Dict[str, Any]
    description: Optional[str] = None
    photo_ref: Optional[str] = None
    notify_family: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, medication) -> "MedicationResponse":
        return cls(
            medication_id=medication.medication_id,
            patient_id=medication.patient_id,
            prescriber_id=medication.prescriber_id,
            name=medication.name,
            dosage=medication.dosage,
            schedule=schedule_to_payload(medication.schedule_definition),
            description=medication.description,
            photo_ref=medication.photo_ref,
            notify_family=bool(medication.notify_family),
            created_at=medication.created_at,
            updated_at=medication.updated_at,
        )


class MedicationSummary(BaseModel):
    medication_id: UUID
    name: str
    dosage: str
    description: Optional[str] = None
    photo_ref: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
