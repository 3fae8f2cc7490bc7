from typing import List
from datetime import date
from pydantic import BaseModel
from uuid import UUID


class ReminderEventResponse(BaseModel):
    medication_id: UUID
    patient_id: UUID
    scheduled_date: date
    scheduled_time: str
    medication_name: str
    dosage: str
    family_ids: List[UUID] = []

    @classmethod
    def from_event(cls, event) -> "ReminderEventResponse":
        return cls(
            medication_id=event.medication_id,
            patient_id=event.patient_id,
            scheduled_date=event.scheduled_date,
            scheduled_time=event.scheduled_time,
            medication_name=event.medication_name,
            dosage=event.dosage,
            family_ids=list(event.family_ids),
        )
