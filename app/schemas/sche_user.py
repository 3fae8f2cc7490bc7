from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.helpers.enums import UserRole


class Principal(BaseModel):
    """Authenticated actor of a request."""
    id: UUID
    role: UserRole


class UserBase(BaseModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = True

    model_config = ConfigDict(from_attributes=True)


class UserItemResponse(UserBase):
    user_id: UUID
    full_name: str
    email: EmailStr
    phone: Optional[str] = None
    is_active: bool
    role: str


class LinkedPatientResponse(BaseModel):
    user_id: UUID
    full_name: str
    email: EmailStr
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserRegisterRequest(BaseModel):
    full_name: str
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    phone: Optional[str] = None
    role: UserRole = UserRole.PATIENT


class UserUpdateMeRequest(BaseModel):
    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)


class DeviceTokenRequest(BaseModel):
    device_token: Optional[str] = Field(None, max_length=512)


class PatientLinkRequest(BaseModel):
    patient_email: EmailStr


class ConnectionResponse(LinkedPatientResponse):
    """Clinician or family member linked to the calling patient."""
    role: UserRole
