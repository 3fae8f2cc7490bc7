import enum


class UserRole(enum.Enum):
    PATIENT = 'PATIENT'
    CLINICIAN = 'CLINICIAN'
    FAMILY = 'FAMILY'


class ScheduleType(enum.Enum):
    DAILY_FIXED_TIMES = 'daily_fixed_times'
    SPECIFIC_DAYS_OF_WEEK = 'specific_days_of_week'
    AS_NEEDED = 'as_needed'
    UNKNOWN = 'unknown'


class Weekday(enum.Enum):
    MON = 'MON'
    TUE = 'TUE'
    WED = 'WED'
    THU = 'THU'
    FRI = 'FRI'
    SAT = 'SAT'
    SUN = 'SUN'

    @classmethod
    def from_index(cls, weekday: int) -> 'Weekday':
        # date.weekday(): Monday is 0
        return list(cls)[weekday]


class ConsumptionStatus(enum.Enum):
    TAKEN = 'taken'
    MISSED = 'missed'


class MarkStatus(enum.Enum):
    TAKEN = 'taken'
    MISSED = 'missed'
    PENDING = 'pending'


class SessionStatus(enum.Enum):
    PENDING = 'pending'
    TAKEN = 'taken'
    MISSED = 'missed'


class NotificationType(enum.Enum):
    MEDICATION_REMINDER = 'MEDICATION_REMINDER'
    FAMILY_MEDICATION_REMINDER = 'FAMILY_MEDICATION_REMINDER'
