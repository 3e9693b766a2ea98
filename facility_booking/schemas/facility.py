from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from facility_booking.models.facility import FacilityType
from facility_booking.schemas.booking import BookingResponse
from facility_booking.utils.validation_helpers import clean_string_list


class FacilityBase(BaseModel):
    name: str = Field(..., min_length=1)
    type: FacilityType
    capacity: int = Field(..., gt=0)
    description: Optional[str] = None
    location: str = Field(..., min_length=1)
    building: str = Field(..., min_length=1)
    floor: Optional[int] = None
    equipment: List[str] = []
    amenities: List[str] = []

    @field_validator("equipment", "amenities")
    @classmethod
    def strip_items(cls, value):
        return clean_string_list(value)


class FacilityCreate(FacilityBase):
    pass


class FacilityUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[FacilityType] = None
    capacity: Optional[int] = Field(None, gt=0)
    description: Optional[str] = None
    location: Optional[str] = Field(None, min_length=1)
    building: Optional[str] = Field(None, min_length=1)
    floor: Optional[int] = None
    equipment: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @field_validator("equipment", "amenities")
    @classmethod
    def strip_items(cls, value):
        return clean_string_list(value)


class FacilityResponse(FacilityBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FacilityDetailResponse(FacilityResponse):
    upcoming_bookings: List[BookingResponse] = []
