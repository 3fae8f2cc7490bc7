from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from app.helpers.enums import UserRole


class Token(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user_id: UUID
    role: UserRole


class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    user_id: Optional[str] = None
    role: Optional[UserRole] = None
