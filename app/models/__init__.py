from app.models.model_base import Base
from app.models.model_user import User
from app.models.model_patient_clinician import PatientClinician
from app.models.model_patient_family import PatientFamily
from app.models.model_medication import Medication
from app.models.model_consumption_record import ConsumptionRecord
from app.models.model_notification import Notification
from app.models.model_patient_location import PatientLocation
