from typing import List, Optional
from app.models.model_medication import Medication
from app.repository.repo_base import BaseRepository

class MedicationRepository(BaseRepository):

    def create(self, medication: Medication) -> Medication:
        self.db.add(medication)
        self._commit('create medication')
        self.db.refresh(medication)
        return medication

    def get_by_id(self, medication_id) -> Optional[Medication]:
        return self.db.query(Medication).filter(Medication.medication_id == medication_id).first()

    def get_by_patient_id(self, patient_id) -> List[Medication]:
        return self.db.query(Medication).filter(
            Medication.patient_id == patient_id
        ).order_by(Medication.name).all()

    def get_all(self) -> List[Medication]:
        return self.db.query(Medication).all()

    def update(self, medication: Medication) -> Medication:
        self._commit('update medication')
        self.db.refresh(medication)
        return medication

    def delete(self, medication: Medication) -> None:
        self.db.delete(medication)
        self._commit('delete medication')
