"""
Repository for the consumption ledger.
Every operation is scoped by (medication_id, patient_id) and commits once.
"""
import logging
from datetime import date, datetime
from typing import List, Optional
from sqlalchemy.orm import Query
from app.models.model_consumption_record import ConsumptionRecord
from app.models.model_medication import Medication
from app.repository.repo_base import BaseRepository

logger = logging.getLogger(__name__)


class ConsumptionRepository(BaseRepository):
    """Repository for ConsumptionRecord entity."""

    def get_by_id(self, consumption_id) -> Optional[ConsumptionRecord]:
        return self.db.query(ConsumptionRecord).filter(
            ConsumptionRecord.consumption_id == consumption_id
        ).first()

    def find_for_day(self, medication_id, patient_id, day: date) -> List[ConsumptionRecord]:
        """
        Get all records of a medication for one calendar day.

        Args:
            medication_id: Medication UUID.
            patient_id: Patient UUID.
            day: Calendar day of the slot.

        Returns:
            Records ordered by consumption time.
        """
        return self.db.query(ConsumptionRecord).filter(
            ConsumptionRecord.medication_id == medication_id,
            ConsumptionRecord.patient_id == patient_id,
            ConsumptionRecord.scheduled_date == day
        ).order_by(ConsumptionRecord.consumed_at).all()

    def find_for_patient_day(self, patient_id, day: date) -> List[ConsumptionRecord]:
        return self.db.query(ConsumptionRecord).filter(
            ConsumptionRecord.patient_id == patient_id,
            ConsumptionRecord.scheduled_date == day
        ).order_by(ConsumptionRecord.consumed_at).all()

    def find_for_day_all_patients(self, day: date) -> List[ConsumptionRecord]:
        return self.db.query(ConsumptionRecord).filter(ConsumptionRecord.scheduled_date == day).all()

    def find_slot(self, medication_id, patient_id, day: date,
                  scheduled_time: Optional[str]) -> Optional[ConsumptionRecord]:
        """
        Get the record of one exact slot; ``scheduled_time=None`` is the untimed slot.
        """
        query = self.db.query(ConsumptionRecord).filter(
            ConsumptionRecord.medication_id == medication_id,
            ConsumptionRecord.patient_id == patient_id,
            ConsumptionRecord.scheduled_date == day
        )
        if scheduled_time is None:
            query = query.filter(ConsumptionRecord.scheduled_time.is_(None))
        else:
            query = query.filter(ConsumptionRecord.scheduled_time == scheduled_time)
        return query.first()

    def upsert(self, medication_id, patient_id, day: date, scheduled_time: Optional[str], status: str,
               notes: Optional[str], consumed_at: datetime,
               existing: Optional[ConsumptionRecord] = None) -> ConsumptionRecord:
        """
        Create the slot record, or overwrite status/notes/consumed_at of the existing one.

        Args:
            existing: Record already resolved by the caller. When omitted the
                exact slot is looked up.

        Returns:
            The created or updated record; an update keeps the same identity.
        """
        record = existing or self.find_slot(medication_id, patient_id, day, scheduled_time)
        if record is None:
            record = ConsumptionRecord(
                medication_id=medication_id,
                patient_id=patient_id,
                scheduled_date=day,
                scheduled_time=scheduled_time
            )
            self.db.add(record)
            action = 'create'
        else:
            action = 'update'
        record.status = status
        record.notes = notes
        record.consumed_at = consumed_at
        self._commit(f'{action} consumption record')
        self.db.refresh(record)
        logger.info(f"Consumption record {action}d: {record.consumption_id} status={status} "
                    f"slot={day} {scheduled_time or 'untimed'}")
        return record

    def remove(self, consumption_id) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if deleted, False if not found.
        """
        record = self.get_by_id(consumption_id)
        if not record:
            return False
        self.db.delete(record)
        self._commit('delete consumption record')
        logger.info(f"Consumption record deleted: {consumption_id}")
        return True

    def history_query(self, patient_id, start_date: Optional[date] = None,
                      end_date: Optional[date] = None) -> Query:
        query = self.db.query(ConsumptionRecord).join(
            Medication, ConsumptionRecord.medication_id == Medication.medication_id
        ).filter(ConsumptionRecord.patient_id == patient_id)
        if start_date:
            query = query.filter(ConsumptionRecord.scheduled_date >= start_date)
        if end_date:
            query = query.filter(ConsumptionRecord.scheduled_date <= end_date)
        return query
