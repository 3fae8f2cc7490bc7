import logging
from fastapi import Depends

from app.helpers.clock import Clock, get_clock
from app.helpers.exception_handler import NotFoundError
from app.models.model_patient_location import PatientLocation
from app.repository.repo_location import LocationRepository
from app.schemas.sche_location import LocationRequest, LocationResponse
from app.schemas.sche_user import Principal
from app.services.srv_access import AccessService

logger = logging.getLogger(__name__)


class LocationService:
    def __init__(self, location_repo: LocationRepository = Depends(),
                 access_service: AccessService = Depends(),
                 clock: Clock = Depends(get_clock)):
        self.location_repo = location_repo
        self.access_service = access_service
        self.clock = clock

    def record_location(self, principal: Principal, data: LocationRequest) -> LocationResponse:
        location = self.location_repo.create(PatientLocation(
            patient_id=principal.id,
            latitude=data.latitude,
            longitude=data.longitude,
            recorded_at=self.clock(),
        ))
        logger.info(f"Location recorded for patient {principal.id}")
        return LocationResponse.model_validate(location)

    def get_last_location(self, principal: Principal, patient_id) -> LocationResponse:
        """Latest reported position of a patient the caller is linked to."""
        self.access_service.get_patient(patient_id)
        self.access_service.ensure_can_access_patient(principal, patient_id, "view this patient's location")
        location = self.location_repo.get_latest(patient_id)
        if not location:
            raise NotFoundError(message='No location recorded for this patient')
        return LocationResponse.model_validate(location)
