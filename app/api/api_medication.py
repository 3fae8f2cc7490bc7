import logging
from datetime import date, datetime
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import PermissionRequired, get_current_principal
from app.helpers.enums import UserRole
from app.helpers.paging import Page, PaginationParams
from app.schemas.sche_base import DataResponse
from app.schemas.sche_consumption import HistoryItemResponse, MarkConsumptionRequest, SessionResponse
from app.schemas.sche_medication import MedicationCreateRequest, MedicationResponse, MedicationUpdateRequest
from app.schemas.sche_user import Principal
from app.services.srv_consumption import ConsumptionService
from app.services.srv_medication import MedicationService

logger = logging.getLogger(__name__)
router = APIRouter()


def _unexpected(action: str, e: Exception) -> CustomException:
    logger.error(f"Unexpected error while trying to {action}: {str(e)}", exc_info=True)
    return CustomException(http_code=500, code='500', message=f'Failed to {action}')


@router.get('/today', response_model=DataResponse[List[SessionResponse]])
def get_today_sessions(
    principal: Principal = Depends(get_current_principal),
    consumption_service: ConsumptionService = Depends()
) -> Any:
    """
    Today's sessions for the caller: a patient's own, or a family member's first linked patient.
    """
    try:
        sessions = consumption_service.get_today_sessions(principal)
        return DataResponse().success_response(data=sessions)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected("load today's sessions", e)


@router.post('/patients/{patient_id}', response_model=DataResponse[MedicationResponse])
def create_medication(
    patient_id: UUID,
    medication_data: MedicationCreateRequest,
    principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN)),
    medication_service: MedicationService = Depends()
) -> Any:
    logger.info(f"Clinician {principal.id} creating medication for patient {patient_id}")
    try:
        medication = medication_service.create_medication(principal, patient_id, medication_data)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('create medication', e)


@router.get('/patients/{patient_id}', response_model=DataResponse[List[MedicationResponse]])
def list_medications(
    patient_id: UUID,
    principal: Principal = Depends(get_current_principal),
    medication_service: MedicationService = Depends()
) -> Any:
    try:
        medications = medication_service.list_medications(principal, patient_id)
        return DataResponse().success_response(data=medications)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('list medications', e)


@router.get('/patients/{patient_id}/sessions', response_model=DataResponse[List[SessionResponse]])
def get_patient_sessions(
    patient_id: UUID,
    day: Optional[date] = Query(None, description="Calendar day (YYYY-MM-DD), defaults to today"),
    as_of: Optional[datetime] = Query(None, description="Local time the sessions are evaluated at, defaults to now"),
    principal: Principal = Depends(get_current_principal),
    consumption_service: ConsumptionService = Depends()
) -> Any:
    try:
        sessions = consumption_service.get_sessions_for_day(principal, patient_id, day, as_of)
        return DataResponse().success_response(data=sessions)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('load sessions', e)


@router.get('/patients/{patient_id}/history', response_model=Page[HistoryItemResponse])
def get_patient_history(
    patient_id: UUID,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    params: PaginationParams = Depends(),
    principal: Principal = Depends(get_current_principal),
    consumption_service: ConsumptionService = Depends()
) -> Any:
    try:
        return consumption_service.get_history(principal, patient_id, start_date, end_date, params)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('load consumption history', e)


@router.get('/{medication_id}', response_model=DataResponse[MedicationResponse])
def get_medication(
    medication_id: UUID,
    principal: Principal = Depends(get_current_principal),
    medication_service: MedicationService = Depends()
) -> Any:
    try:
        return DataResponse().success_response(data=medication_service.get_medication(principal, medication_id))
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('load medication', e)


@router.put('/{medication_id}', response_model=DataResponse[MedicationResponse])
def update_medication(
    medication_id: UUID,
    medication_data: MedicationUpdateRequest,
    principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN)),
    medication_service: MedicationService = Depends()
) -> Any:
    try:
        medication = medication_service.update_medication(principal, medication_id, medication_data)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('update medication', e)


@router.delete('/{medication_id}', response_model=DataResponse[bool])
def delete_medication(
    medication_id: UUID,
    principal: Principal = Depends(PermissionRequired(UserRole.CLINICIAN)),
    medication_service: MedicationService = Depends()
) -> Any:
    try:
        return DataResponse().success_response(data=medication_service.delete_medication(principal, medication_id))
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('delete medication', e)


@router.post('/{medication_id}/consumption', response_model=DataResponse[SessionResponse])
def mark_consumption(
    medication_id: UUID,
    mark_data: MarkConsumptionRequest,
    principal: Principal = Depends(get_current_principal),
    consumption_service: ConsumptionService = Depends()
) -> Any:
    """
    Mark a dose taken or missed, or set it back to pending.
    """
    logger.info(f"{principal.role.value} {principal.id} marking {medication_id} as {mark_data.status.value}")
    try:
        session = consumption_service.mark_consumption(
            principal, medication_id, mark_data.status,
            notes=mark_data.notes, scheduled_time=mark_data.scheduled_time
        )
        return DataResponse().success_response(data=session)
    except CustomException:
        raise
    except Exception as e:
        raise _unexpected('mark consumption', e)
