"""
Access Service - single resolver for principal-to-patient relations.
Answers the prescriber and patient-link questions the medication and
consumption services ask, memoising lookups for the lifetime of one request.
"""
import logging
from typing import Dict, Tuple
from fastapi import Depends

from app.helpers.enums import UserRole
from app.helpers.exception_handler import AuthorizationError, NotFoundError
from app.models.model_medication import Medication
from app.models.model_user import User
from app.repository.repo_user import UserRepository
from app.schemas.sche_user import Principal

logger = logging.getLogger(__name__)


class AccessService:

    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo
        self._link_cache: Dict[Tuple, bool] = {}

    def get_patient(self, patient_id) -> User:
        patient = self.user_repo.get_by_id(patient_id)
        if not patient or patient.role != UserRole.PATIENT.value:
            raise NotFoundError(message='Patient not found')
        return patient

    def is_patient_linked(self, principal: Principal, patient_id) -> bool:
        """
        True when the principal may act for the patient: the patient themselves,
        a clinician with a clinician-patient link, or a family member with a
        family-patient link.
        """
        key = (principal.id, principal.role, patient_id)
        if key in self._link_cache:
            return self._link_cache[key]

        if principal.role == UserRole.PATIENT:
            linked = principal.id == patient_id
        elif principal.role == UserRole.CLINICIAN:
            linked = self.user_repo.clinician_link_exists(principal.id, patient_id)
        elif principal.role == UserRole.FAMILY:
            linked = self.user_repo.family_link_exists(principal.id, patient_id)
        else:
            linked = False

        self._link_cache[key] = linked
        return linked

    def is_prescriber_for(self, principal: Principal, medication: Medication) -> bool:
        return principal.role == UserRole.CLINICIAN and medication.prescriber_id == principal.id

    def ensure_can_access_patient(self, principal: Principal, patient_id, action: str = 'access this patient') -> None:
        if not self.is_patient_linked(principal, patient_id):
            logger.warning(f"Denied {principal.role.value} {principal.id}: {action} ({patient_id})")
            raise AuthorizationError(message=f'Not authorized to {action}')

    def ensure_prescriber(self, principal: Principal, medication: Medication, action: str) -> None:
        if not self.is_prescriber_for(principal, medication):
            logger.warning(f"Denied {principal.role.value} {principal.id}: {action} ({medication.medication_id})")
            raise AuthorizationError(message=f'Only the prescribing clinician can {action}')

    def resolve_default_patient(self, principal: Principal):
        """Patient whose 'today' view the principal sees: themselves, or a family member's first linked patient."""
        if principal.role == UserRole.PATIENT:
            return principal.id
        if principal.role == UserRole.FAMILY:
            patients = self.user_repo.get_patients_of_family(principal.id)
            if patients:
                return patients[0].user_id
        raise AuthorizationError(message="Not authorized to view today's medications")

    def ensure_can_mark(self, principal: Principal, medication: Medication) -> None:
        """
        Marking a dose is open to the patient, linked family members and the
        prescribing clinician while linked to the patient.
        """
        self.ensure_can_access_patient(principal, medication.patient_id, 'mark consumption for this patient')
        if principal.role == UserRole.CLINICIAN:
            self.ensure_prescriber(principal, medication, 'mark consumption for this medication')
