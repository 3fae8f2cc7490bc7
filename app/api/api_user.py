import logging
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.helpers.enums import UserRole
from app.helpers.login_manager import PermissionRequired, login_required
from app.schemas.sche_base import DataResponse
from app.schemas.sche_user import (
    ConnectionResponse, DeviceTokenRequest, LinkedPatientResponse, PatientLinkRequest, Principal,
    UserItemResponse, UserUpdateMeRequest
)
from app.schemas.sche_location import LocationRequest, LocationResponse
from app.services.srv_location import LocationService
from app.services.srv_user import UserService
from app.models.model_user import User

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=DataResponse[UserItemResponse])
def detail_me(current_user: User = Depends(login_required)) -> Any:
    """
    API get detail current User
    """
    return DataResponse().success_response(data=UserItemResponse.model_validate(current_user))


@router.put("/me", response_model=DataResponse[UserItemResponse])
def update_me(user_data: UserUpdateMeRequest,
              current_user: User = Depends(login_required),
              user_service: UserService = Depends()) -> Any:
    """
    API Update current User
    """
    updated_user = user_service.update_me(data=user_data, current_user=current_user)
    return DataResponse().success_response(data=updated_user)


@router.put("/me/device-token", response_model=DataResponse[UserItemResponse])
def update_device_token(token_data: DeviceTokenRequest,
                        current_user: User = Depends(login_required),
                        user_service: UserService = Depends()) -> Any:
    """
    API register the push device token of the current User
    """
    return DataResponse().success_response(data=user_service.update_device_token(token_data, current_user))


@router.post("/links", response_model=DataResponse[LinkedPatientResponse])
def link_patient(link_data: PatientLinkRequest,
                 principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN, UserRole.FAMILY)),
                 user_service: UserService = Depends()) -> Any:
    """
    API link the current clinician or family member to a patient by email
    """
    return DataResponse().success_response(data=user_service.link_patient(principal, link_data.patient_email))


@router.get("/me/connections", response_model=DataResponse[List[ConnectionResponse]])
def get_connections(principal: Principal = Depends(PermissionRequired(UserRole.PATIENT)),
                    user_service: UserService = Depends()) -> Any:
    """
    API list the clinicians and family members linked to the current patient
    """
    return DataResponse().success_response(data=user_service.get_connections(principal))


@router.post("/me/location", response_model=DataResponse[LocationResponse])
def record_location(location_data: LocationRequest,
                    principal: Principal = Depends(PermissionRequired(UserRole.PATIENT)),
                    location_service: LocationService = Depends()) -> Any:
    return DataResponse().success_response(data=location_service.record_location(principal, location_data))


@router.get("/links", response_model=DataResponse[List[LinkedPatientResponse]])
def get_linked_patients(name: Optional[str] = Query(None, min_length=2),
                        principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN, UserRole.FAMILY)),
                        user_service: UserService = Depends()) -> Any:
    """
    API list linked patients, optionally filtered by a part of their name
    """
    return DataResponse().success_response(data=user_service.get_linked_patients(principal, name=name))


@router.delete("/links/{patient_id}", response_model=DataResponse[bool])
def unlink_patient(patient_id: UUID,
                   principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN, UserRole.FAMILY)),
                   user_service: UserService = Depends()) -> Any:
    return DataResponse().success_response(data=user_service.unlink_patient(principal, patient_id))


@router.get("/links/{patient_id}/location", response_model=DataResponse[LocationResponse])
def get_patient_location(patient_id: UUID,
                         principal: Principal = Depends(PermissionRequired(UserRole.FAMILY)),
                         location_service: LocationService = Depends()) -> Any:
    """
    API last reported location of a linked patient
    """
    return DataResponse().success_response(data=location_service.get_last_location(principal, patient_id))
