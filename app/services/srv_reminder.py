"""
Reminder Service - finds timed sessions coming due and delivers them.

Evaluation is driven from outside: the ReminderPoller task or an external
scheduler calling the due-reminders endpoint once per window.
"""
import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import List, Optional
from fastapi import Depends

from app.helpers.clock import Clock, get_clock, to_local_naive
from app.helpers.enums import NotificationType
from app.models.model_notification import Notification
from app.repository.repo_consumption import ConsumptionRepository
from app.repository.repo_medication import MedicationRepository
from app.repository.repo_notification import NotificationRepository
from app.repository.repo_user import UserRepository
from app.scheduling import ReminderEvent, derive_sessions, is_due, should_suppress
from app.scheduling.reminders import FAMILY_TITLE, PATIENT_TITLE
from app.services.push_notifier import PushNotifier, get_push_notifier

logger = logging.getLogger(__name__)


class ReminderService:

    def __init__(
        self,
        medication_repo: MedicationRepository = Depends(),
        consumption_repo: ConsumptionRepository = Depends(),
        user_repo: UserRepository = Depends(),
        notification_repo: NotificationRepository = Depends(),
        notifier: PushNotifier = Depends(get_push_notifier),
        clock: Clock = Depends(get_clock)
    ):
        self.medication_repo = medication_repo
        self.consumption_repo = consumption_repo
        self.user_repo = user_repo
        self.notification_repo = notification_repo
        self.notifier = notifier
        self.clock = clock

    def due_reminders(self, day: date, as_of: datetime, window_minutes: int = 1) -> List[ReminderEvent]:
        """
        Reminder events for every timed session scheduled in ``(as_of - window, as_of]``.

        Slots that already hold a taken record are suppressed. Family members
        are attached only for medications with ``notify_family`` set.
        """
        as_of = to_local_naive(as_of)
        records_by_medication = defaultdict(list)
        for record in self.consumption_repo.find_for_day_all_patients(day):
            records_by_medication[record.medication_id].append(record)

        events = []
        for medication in self.medication_repo.get_all():
            day_records = records_by_medication[medication.medication_id]
            for expected in derive_sessions(medication.schedule_definition, day):
                if not is_due(expected, day, as_of, window_minutes):
                    continue
                if should_suppress(expected.scheduled_time, day_records):
                    logger.debug(f"Reminder suppressed: {medication.medication_id} {expected.scheduled_time} already taken")
                    continue

                patient = self.user_repo.get_by_id(medication.patient_id)
                family_ids = []
                if medication.notify_family:
                    family_ids = [f.user_id for f in self.user_repo.get_family_of_patient(medication.patient_id)]
                events.append(ReminderEvent(
                    medication_id=medication.medication_id,
                    patient_id=medication.patient_id,
                    scheduled_date=day,
                    scheduled_time=expected.scheduled_time,
                    medication_name=medication.name,
                    dosage=medication.dosage,
                    patient_name=patient.full_name if patient else None,
                    family_ids=family_ids,
                ))

        logger.info(f"{len(events)} reminder(s) due at {as_of:%Y-%m-%d %H:%M} (window {window_minutes}m)")
        return events

    def dispatch(self, events: List[ReminderEvent]) -> int:
        """
        Push each event to the patient and any attached family members and
        store an inbox notification per recipient.

        Returns:
            Number of notifications stored.
        """
        notifications = []
        for event in events:
            recipients = [(event.patient_id, PATIENT_TITLE, event.patient_body(),
                           NotificationType.MEDICATION_REMINDER)]
            recipients += [(family_id, FAMILY_TITLE, event.family_body(),
                            NotificationType.FAMILY_MEDICATION_REMINDER) for family_id in event.family_ids]

            for user_id, title, body, notification_type in recipients:
                user = self.user_repo.get_by_id(user_id)
                if user is None:
                    logger.warning(f"Reminder recipient {user_id} no longer exists")
                    continue
                if user.device_token:
                    self.notifier.send(user.device_token, title, body, event.data())
                else:
                    logger.info(f"No device token for {user_id}, reminder stored in inbox only")
                notifications.append(Notification(
                    user_id=user_id,
                    title=title,
                    message=body,
                    medication_id=event.medication_id,
                    scheduled_time=event.scheduled_time,
                    type=notification_type.value,
                ))

        if notifications:
            self.notification_repo.create_many(notifications)
        return len(notifications)

    def due_between(self, since: datetime, until: datetime) -> List[ReminderEvent]:
        """
        Reminder events for every slot in ``(since, until]``, evaluated one
        calendar day at a time so a window crossing midnight keeps the slots
        late on the earlier day.
        """
        since, until = to_local_naive(since), to_local_naive(until)
        events = []
        day = since.date()
        while day <= until.date():
            segment_start = since if day == since.date() else datetime.combine(day, time.min) - timedelta(minutes=1)
            segment_end = until if day == until.date() else datetime.combine(day, time(23, 59))
            window = int((segment_end - segment_start).total_seconds() // 60)
            if window > 0:
                events += self.due_reminders(day, segment_end, window)
            day += timedelta(days=1)
        return events

    def run_once(self, as_of: Optional[datetime] = None, window_minutes: int = 1) -> List[ReminderEvent]:
        as_of = to_local_naive(as_of) or self.clock()
        events = self.due_between(as_of - timedelta(minutes=window_minutes), as_of)
        self.dispatch(events)
        return events
