from typing import List, Optional
from app.models.model_user import User
from app.models.model_patient_clinician import PatientClinician
from app.models.model_patient_family import PatientFamily
from app.repository.repo_base import BaseRepository

class UserRepository(BaseRepository):

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_phone(self, phone: str) -> Optional[User]:
        return self.db.query(User).filter(User.phone == phone).first()

    def get_by_id(self, user_id) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def get_by_ids(self, user_ids) -> List[User]:
        if not user_ids:
            return []
        return self.db.query(User).filter(User.user_id.in_(list(user_ids))).all()

    def create(self, user_data: User) -> User:
        self.db.add(user_data)
        self._commit('create user')
        self.db.refresh(user_data)
        return user_data

    def update(self, user: User) -> User:
        self._commit('update user')
        self.db.refresh(user)
        return user

    def clinician_link_exists(self, clinician_id, patient_id) -> bool:
        return self.db.query(PatientClinician).filter(
            PatientClinician.clinician_id == clinician_id,
            PatientClinician.patient_id == patient_id
        ).count() > 0

    def family_link_exists(self, family_id, patient_id) -> bool:
        return self.db.query(PatientFamily).filter(
            PatientFamily.family_id == family_id,
            PatientFamily.patient_id == patient_id
        ).count() > 0

    def create_patient_clinician(self, patient_id, clinician_id) -> PatientClinician:
        link = PatientClinician(patient_id=patient_id, clinician_id=clinician_id)
        self.db.add(link)
        self._commit('link clinician to patient')
        return link

    def create_patient_family(self, patient_id, family_id) -> PatientFamily:
        link = PatientFamily(patient_id=patient_id, family_id=family_id)
        self.db.add(link)
        self._commit('link family member to patient')
        return link

    def delete_patient_clinician(self, patient_id, clinician_id) -> bool:
        deleted = self.db.query(PatientClinician).filter(
            PatientClinician.clinician_id == clinician_id,
            PatientClinician.patient_id == patient_id
        ).delete(synchronize_session=False)
        self._commit('unlink clinician from patient')
        return deleted > 0

    def delete_patient_family(self, patient_id, family_id) -> bool:
        deleted = self.db.query(PatientFamily).filter(
            PatientFamily.family_id == family_id,
            PatientFamily.patient_id == patient_id
        ).delete(synchronize_session=False)
        self._commit('unlink family member from patient')
        return deleted > 0

    def get_patients_of_clinician(self, clinician_id, name: Optional[str] = None) -> List[User]:
        query = self.db.query(User).join(PatientClinician, PatientClinician.patient_id == User.user_id).filter(
            PatientClinician.clinician_id == clinician_id
        )
        if name:
            return query.filter(User.full_name.ilike(f'%{name}%')).order_by(User.full_name).all()
        return query.order_by(PatientClinician.assigned_at).all()

    def get_patients_of_family(self, family_id, name: Optional[str] = None) -> List[User]:
        query = self.db.query(User).join(PatientFamily, PatientFamily.patient_id == User.user_id).filter(
            PatientFamily.family_id == family_id
        )
        if name:
            return query.filter(User.full_name.ilike(f'%{name}%')).order_by(User.full_name).all()
        return query.order_by(PatientFamily.assigned_at).all()

    def get_clinicians_of_patient(self, patient_id) -> List[User]:
        return self.db.query(User).join(PatientClinician, PatientClinician.clinician_id == User.user_id).filter(
            PatientClinician.patient_id == patient_id
        ).order_by(PatientClinician.assigned_at).all()

    def get_family_of_patient(self, patient_id) -> List[User]:
        return self.db.query(User).join(PatientFamily, PatientFamily.family_id == User.user_id).filter(
            PatientFamily.patient_id == patient_id
        ).all()
