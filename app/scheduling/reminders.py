"""
Reminder trigger: suppression predicate and event payload.

The timer that decides *when* to evaluate lives outside this module
(``ReminderPoller`` or an external trigger calling the due-reminders endpoint).
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from app.helpers.enums import ConsumptionStatus
from app.scheduling.deriver import ExpectedSession
from app.scheduling.reconciler import slot_datetime

PATIENT_TITLE = 'Time to take your medication!'
FAMILY_TITLE = 'Medication reminder for your family member'


@dataclass
class ReminderEvent:
    medication_id: Any
    patient_id: Any
    scheduled_date: date
    scheduled_time: str
    medication_name: str
    dosage: str
    patient_name: Optional[str] = None
    family_ids: List[Any] = field(default_factory=list)

    def patient_body(self) -> str:
        return f"It is time to take {self.medication_name} ({self.dosage}). Don't forget!"

    def family_body(self) -> str:
        who = self.patient_name or 'Your family member'
        return f"{who} should take {self.medication_name} ({self.dosage}) now. Please remind them!"

    def data(self) -> Dict[str, str]:
        return {
            'type': 'medication_reminder',
            'medication_id': str(self.medication_id),
            'patient_id': str(self.patient_id),
            'scheduled_time': self.scheduled_time,
            'medication_name': self.medication_name,
            'dosage': self.dosage,
        }


def is_due(expected: ExpectedSession, day: date, as_of: datetime, window_minutes: int = 1) -> bool:
    """True when the timed session falls inside ``(as_of - window, as_of]``."""
    if not expected.is_timed:
        return False
    scheduled_at = slot_datetime(day, expected.scheduled_time)
    return as_of - timedelta(minutes=window_minutes) < scheduled_at <= as_of


def should_suppress(scheduled_time: str, day_records: Iterable[Any]) -> bool:
    """A reminder is suppressed once the exact slot already has a taken record."""
    return any(
        r.scheduled_time == scheduled_time and r.status == ConsumptionStatus.TAKEN.value
        for r in day_records
    )
