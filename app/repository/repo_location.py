from typing import Optional
from app.models.model_patient_location import PatientLocation
from app.repository.repo_base import BaseRepository

class LocationRepository(BaseRepository):

    def create(self, location: PatientLocation) -> PatientLocation:
        self.db.add(location)
        self._commit('record patient location')
        self.db.refresh(location)
        return location

    def get_latest(self, patient_id) -> Optional[PatientLocation]:
        return self.db.query(PatientLocation).filter(
            PatientLocation.patient_id == patient_id
        ).order_by(PatientLocation.recorded_at.desc()).first()
