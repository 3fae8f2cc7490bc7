import logging
from typing import List
from fastapi import Depends

from app.helpers.enums import UserRole, Weekday
from app.helpers.exception_handler import AuthorizationError, NotFoundError, ValidationError
from app.models.model_medication import Medication
from app.repository.repo_medication import MedicationRepository
from app.scheduling import (
    DailyFixedTimes, SpecificDaysOfWeek, UnknownSchedule, parse_schedule, serialize_schedule
)
from app.schemas.sche_medication import MedicationBase, MedicationResponse
from app.schemas.sche_user import Principal
from app.services.srv_access import AccessService

logger = logging.getLogger(__name__)


class MedicationService:
    def __init__(self, medication_repo: MedicationRepository = Depends(),
                 access_service: AccessService = Depends()):
        self.medication_repo = medication_repo
        self.access_service = access_service

    @staticmethod
    def _validated_schedule(payload: MedicationBase) -> str:
        schedule = parse_schedule(payload.schedule)
        if isinstance(schedule, UnknownSchedule):
            raise ValidationError(
                message='schedule must be an object with type daily_fixed_times, specific_days_of_week or as_needed'
            )
        if isinstance(schedule, DailyFixedTimes) and not schedule.times:
            raise ValidationError(message='times must list at least one HH:MM time')
        if isinstance(schedule, SpecificDaysOfWeek):
            if not schedule.days:
                raise ValidationError(message='days_of_week must list at least one day')
            valid_days = {d.value for d in Weekday}
            unknown_days = [d for d in schedule.days if d not in valid_days]
            if unknown_days:
                raise ValidationError(
                    message=f"Unknown day(s) {', '.join(unknown_days)}; expected {', '.join(d.value for d in Weekday)}"
                )
        return serialize_schedule(schedule)

    def get_medication_or_404(self, medication_id) -> Medication:
        medication = self.medication_repo.get_by_id(medication_id)
        if not medication:
            raise NotFoundError(message='Medication not found')
        return medication

    def create_medication(self, principal: Principal, patient_id, data: MedicationBase) -> MedicationResponse:
        schedule = self._validated_schedule(data)
        self.access_service.get_patient(patient_id)
        if principal.role != UserRole.CLINICIAN:
            raise AuthorizationError(message='Only clinicians can prescribe medications')
        self.access_service.ensure_can_access_patient(principal, patient_id, 'prescribe for this patient')

        medication = Medication(
            patient_id=patient_id,
            prescriber_id=principal.id,
            name=data.name,
            dosage=data.dosage,
            schedule=schedule,
            description=data.description,
            photo_ref=data.photo_ref,
            notify_family=data.notify_family,
        )
        medication = self.medication_repo.create(medication)
        logger.info(f"Medication {medication.medication_id} prescribed by {principal.id} for {patient_id}")
        return MedicationResponse.from_model(medication)

    def list_medications(self, principal: Principal, patient_id) -> List[MedicationResponse]:
        self.access_service.get_patient(patient_id)
        self.access_service.ensure_can_access_patient(principal, patient_id, "view this patient's medications")
        medications = self.medication_repo.get_by_patient_id(patient_id)
        return [MedicationResponse.from_model(m) for m in medications]

    def get_medication(self, principal: Principal, medication_id) -> MedicationResponse:
        medication = self.get_medication_or_404(medication_id)
        self.access_service.ensure_can_access_patient(principal, medication.patient_id, 'view this medication')
        return MedicationResponse.from_model(medication)

    def update_medication(self, principal: Principal, medication_id, data: MedicationBase) -> MedicationResponse:
        schedule = self._validated_schedule(data)
        medication = self.get_medication_or_404(medication_id)
        self.access_service.ensure_prescriber(principal, medication, 'update this medication')

        medication.name = data.name
        medication.dosage = data.dosage
        medication.schedule = schedule
        medication.description = data.description
        medication.photo_ref = data.photo_ref
        medication.notify_family = data.notify_family
        medication = self.medication_repo.update(medication)
        logger.info(f"Medication {medication_id} updated by {principal.id}")
        return MedicationResponse.from_model(medication)

    def delete_medication(self, principal: Principal, medication_id) -> bool:
        medication = self.get_medication_or_404(medication_id)
        self.access_service.ensure_prescriber(principal, medication, 'delete this medication')
        self.medication_repo.delete(medication)
        logger.info(f"Medication {medication_id} deleted by {principal.id}")
        return True
