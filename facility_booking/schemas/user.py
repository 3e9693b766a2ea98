from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from facility_booking.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3)
    email: str
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str


class UserSummary(BaseModel):
    id: int
    username: str
    full_name: Optional[str] = None
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
