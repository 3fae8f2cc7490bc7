"""
Consumption Service - joins derived sessions with the consumption ledger.
Builds the per-day session view and applies mark/undo commands.
"""
import logging
from collections import defaultdict
from datetime import date, datetime
from typing import List, Optional
from fastapi import Depends

from app.core.config import settings
from app.helpers.clock import Clock, get_clock, to_local_naive
from app.helpers.enums import ConsumptionStatus, MarkStatus
from app.helpers.exception_handler import ValidationError
from app.helpers.paging import Page, PaginationParams, paginate
from app.models.model_consumption_record import ConsumptionRecord
from app.models.model_medication import Medication
from app.repository.repo_consumption import ConsumptionRepository
from app.repository.repo_medication import MedicationRepository
from app.scheduling import (
    ExpectedSession,
    MarkAction,
    annotate_taken_notes,
    classify_session,
    derive_sessions,
    resolve_mark,
    slot_datetime,
)
from app.schemas.sche_consumption import HistoryItemResponse, SessionResponse
from app.schemas.sche_user import Principal
from app.services.srv_access import AccessService
from app.services.srv_medication import MedicationService

logger = logging.getLogger(__name__)


class ConsumptionService:
    """
    Status reconciler over the consumption ledger.

    A session's pending state is the absence of a record: marking taken or
    missed writes the slot's single record, undoing deletes it.
    """

    def __init__(
        self,
        medication_repo: MedicationRepository = Depends(),
        consumption_repo: ConsumptionRepository = Depends(),
        access_service: AccessService = Depends(),
        medication_service: MedicationService = Depends(),
        clock: Clock = Depends(get_clock)
    ):
        self.medication_repo = medication_repo
        self.consumption_repo = consumption_repo
        self.access_service = access_service
        self.medication_service = medication_service
        self.clock = clock

    # ---- day view ----

    def sessions_for_day(self, patient_id, day: date, as_of: datetime) -> List[SessionResponse]:
        """
        Sessions of every medication of the patient on ``day``, classified as of ``as_of``.

        Timed sessions come first ordered by time, then untimed sessions by
        medication name. Weekday schedules not due on ``day`` are left out.
        """
        medications = self.medication_repo.get_by_patient_id(patient_id)
        records_by_medication = defaultdict(list)
        for record in self.consumption_repo.find_for_patient_day(patient_id, day):
            records_by_medication[record.medication_id].append(record)

        sessions = []
        for medication in medications:
            for expected in derive_sessions(medication.schedule_definition, day):
                session = classify_session(
                    medication.medication_id,
                    expected,
                    records_by_medication[medication.medication_id],
                    day,
                    as_of,
                    missed_after=settings.BEFORE_MISSED_MINUTES
                )
                sessions.append(SessionResponse.from_session(session, medication, day))

        sessions.sort(key=lambda s: (s.scheduled_time is None, s.scheduled_time or '', s.medication_name))
        return sessions

    def get_sessions_for_day(self, principal: Principal, patient_id, day: Optional[date] = None,
                             as_of: Optional[datetime] = None) -> List[SessionResponse]:
        self.access_service.get_patient(patient_id)
        self.access_service.ensure_can_access_patient(principal, patient_id, "view this patient's sessions")
        as_of = to_local_naive(as_of) or self.clock()
        return self.sessions_for_day(patient_id, day or as_of.date(), as_of)

    def get_today_sessions(self, principal: Principal) -> List[SessionResponse]:
        patient_id = self.access_service.resolve_default_patient(principal)
        now = self.clock()
        return self.sessions_for_day(patient_id, now.date(), now)

    # ---- mark command ----

    @staticmethod
    def _select_slot(medication: Medication, expected: List[ExpectedSession],
                     scheduled_time: Optional[str]) -> ExpectedSession:
        timed = [e for e in expected if e.is_timed]
        if not timed:
            if not expected:
                raise ValidationError(message=f'{medication.name} is not scheduled today')
            return expected[0]
        if scheduled_time is None:
            raise ValidationError(message='scheduled_time is required for fixed-time medications')
        for session in timed:
            if session.scheduled_time == scheduled_time:
                return session
        raise ValidationError(message=f'{scheduled_time} is not a scheduled time of {medication.name}')

    def _find_existing(self, medication: Medication, day: date,
                       slot: ExpectedSession) -> Optional[ConsumptionRecord]:
        if slot.is_timed:
            return self.consumption_repo.find_slot(
                medication.medication_id, medication.patient_id, day, slot.scheduled_time
            )
        # untimed sessions own every record of the day
        records = self.consumption_repo.find_for_day(medication.medication_id, medication.patient_id, day)
        for record in records:
            if record.status == ConsumptionStatus.TAKEN.value:
                return record
        return records[0] if records else None

    def mark_consumption(self, principal: Principal, medication_id, status: MarkStatus,
                         notes: Optional[str] = None, scheduled_time: Optional[str] = None) -> SessionResponse:
        """
        Mark a dose taken, missed, or undo it back to pending.

        Args:
            principal: Acting user; the patient, a linked family member or the prescriber.
            medication_id: Medication UUID.
            status: taken, missed or pending.
            notes: Free text; taken marks on timed slots get a lateness annotation.
            scheduled_time: Slot time (HH:MM); required for fixed-time medications.

        Returns:
            The slot's session after the transition.
        """
        medication = self.medication_service.get_medication_or_404(medication_id)
        self.access_service.ensure_can_mark(principal, medication)

        now = self.clock()
        day = now.date()
        slot = self._select_slot(medication, derive_sessions(medication.schedule_definition, day), scheduled_time)
        existing = self._find_existing(medication, day, slot)
        action = resolve_mark(status, existing)

        if action == MarkAction.UPSERT:
            final_notes = notes or None
            if status == MarkStatus.TAKEN and slot.is_timed:
                final_notes = annotate_taken_notes(
                    notes, slot_datetime(day, slot.scheduled_time), now,
                    tolerance=settings.AFTER_SCHEDULED_MINUTES
                )
            self.consumption_repo.upsert(
                medication.medication_id,
                medication.patient_id,
                day,
                slot.scheduled_time,
                status.value,
                final_notes,
                now,
                existing=existing
            )
        elif action == MarkAction.REMOVE:
            self.consumption_repo.remove(existing.consumption_id)
        else:
            logger.info(f"Mark {status.value} on {medication_id} {slot.scheduled_time or 'untimed'}: nothing to change")

        logger.info(f"{principal.role.value} {principal.id} marked {medication_id} "
                    f"{slot.scheduled_time or 'untimed'} as {status.value} ({action.value})")

        day_records = self.consumption_repo.find_for_day(medication.medication_id, medication.patient_id, day)
        session = classify_session(
            medication.medication_id, slot, day_records, day, now,
            missed_after=settings.BEFORE_MISSED_MINUTES
        )
        return SessionResponse.from_session(session, medication, day)

    # ---- history ----

    def get_history(self, principal: Principal, patient_id, start_date: Optional[date] = None,
                    end_date: Optional[date] = None, params: Optional[PaginationParams] = None) -> Page:
        if start_date and end_date and start_date > end_date:
            raise ValidationError(message='start_date must not be after end_date')
        self.access_service.get_patient(patient_id)
        self.access_service.ensure_can_access_patient(principal, patient_id, "view this patient's history")
        query = self.consumption_repo.history_query(patient_id, start_date, end_date)
        return paginate(ConsumptionRecord, query, params, transform=HistoryItemResponse.from_model)
