import logging
from typing import List, Optional
from fastapi import Depends

from app.models.model_user import User
from app.core.security import verify_password, get_password_hash
from app.schemas.sche_user import (
    ConnectionResponse, DeviceTokenRequest, LinkedPatientResponse, Principal, UserItemResponse,
    UserRegisterRequest, UserUpdateMeRequest
)
from app.repository.repo_user import UserRepository
from app.helpers.enums import UserRole
from app.helpers.exception_handler import (
    AuthorizationError, ConflictError, NotFoundError, ValidationError
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo

    def authenticate(self, *, email: str, password: str) -> Optional[User]:
        user = self.user_repo.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def register_user(self, data: UserRegisterRequest) -> UserItemResponse:
        if self.user_repo.get_by_email(data.email):
            raise ConflictError(message='Email already exists')

        if data.phone and self.user_repo.get_by_phone(data.phone):
            raise ConflictError(message='Phone number already exists')

        new_user = User(
            full_name=data.full_name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            phone=data.phone,
            is_active=True,
            role=data.role.value,
        )
        created_user = self.user_repo.create(new_user)
        logger.info(f"Registered {created_user.role} {created_user.user_id}")
        return UserItemResponse.model_validate(created_user)

    def update_me(self, data: UserUpdateMeRequest, current_user: User) -> UserItemResponse:
        if data.email is not None:
            exist_user = self.user_repo.get_by_email(data.email)
            if exist_user and exist_user.user_id != current_user.user_id:
                raise ConflictError(message='Email already exists')

        current_user.full_name = current_user.full_name if data.full_name is None else data.full_name
        current_user.email = current_user.email if data.email is None else data.email
        if data.password:
            current_user.hashed_password = get_password_hash(data.password)

        return UserItemResponse.model_validate(self.user_repo.update(current_user))

    def update_device_token(self, data: DeviceTokenRequest, current_user: User) -> UserItemResponse:
        current_user.device_token = data.device_token
        logger.info(f"Device token {'set' if data.device_token else 'cleared'} for {current_user.user_id}")
        return UserItemResponse.model_validate(self.user_repo.update(current_user))

    def link_patient(self, principal: Principal, patient_email: str) -> LinkedPatientResponse:
        """
        Link the calling clinician or family member to a patient account.
        """
        patient = self.user_repo.get_by_email(patient_email)
        if not patient:
            raise NotFoundError(message='Patient not found')
        if patient.role != UserRole.PATIENT.value:
            raise ValidationError(message=f'{patient_email} is not a patient account')

        if principal.role == UserRole.CLINICIAN:
            if self.user_repo.clinician_link_exists(principal.id, patient.user_id):
                raise ConflictError(message='Patient is already linked to this clinician')
            self.user_repo.create_patient_clinician(patient_id=patient.user_id, clinician_id=principal.id)
        elif principal.role == UserRole.FAMILY:
            if self.user_repo.family_link_exists(principal.id, patient.user_id):
                raise ConflictError(message='Patient is already linked to this family member')
            self.user_repo.create_patient_family(patient_id=patient.user_id, family_id=principal.id)
        else:
            raise AuthorizationError(message='Only clinicians and family members can link patients')

        logger.info(f"{principal.role.value} {principal.id} linked to patient {patient.user_id}")
        return LinkedPatientResponse.model_validate(patient)

    def unlink_patient(self, principal: Principal, patient_id) -> bool:
        if principal.role == UserRole.CLINICIAN:
            removed = self.user_repo.delete_patient_clinician(patient_id=patient_id, clinician_id=principal.id)
        elif principal.role == UserRole.FAMILY:
            removed = self.user_repo.delete_patient_family(patient_id=patient_id, family_id=principal.id)
        else:
            raise AuthorizationError(message='Only clinicians and family members can unlink patients')
        if not removed:
            raise NotFoundError(message='Patient is not linked to this account')
        logger.info(f"{principal.role.value} {principal.id} unlinked from patient {patient_id}")
        return True

    def get_linked_patients(self, principal: Principal, name: Optional[str] = None) -> List[LinkedPatientResponse]:
        if principal.role == UserRole.CLINICIAN:
            patients = self.user_repo.get_patients_of_clinician(principal.id, name=name)
        elif principal.role == UserRole.FAMILY:
            patients = self.user_repo.get_patients_of_family(principal.id, name=name)
        else:
            raise AuthorizationError(message='Only clinicians and family members have linked patients')
        return [LinkedPatientResponse.model_validate(p) for p in patients]

    def get_connections(self, principal: Principal) -> List[ConnectionResponse]:
        """Clinicians first, then family members linked to the calling patient."""
        if principal.role != UserRole.PATIENT:
            raise AuthorizationError(message='Only patients have linked clinicians and family members')
        linked = self.user_repo.get_clinicians_of_patient(principal.id) + \
            self.user_repo.get_family_of_patient(principal.id)
        return [ConnectionResponse.model_validate(u) for u in linked]
