from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from facility_booking.models.booking import BookingStatus
from facility_booking.schemas.user import UserSummary
from facility_booking.utils.validation_helpers import to_naive_utc


class BookingCreate(BaseModel):
    facility_id: int
    start_time: datetime
    end_time: datetime
    purpose: str = Field(..., min_length=1)
    attendees: int = Field(1, ge=1)
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, value):
        return to_naive_utc(value)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
    rejection_reason: Optional[str] = None
    cancellation_reason: Optional[str] = None


class FacilitySummary(BaseModel):
    id: int
    name: str
    building: str
    floor: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class BookingResponse(BaseModel):
    id: int
    user_id: int
    facility_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    purpose: str
    attendees: int
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    facility: FacilitySummary


class AdminBookingResponse(BookingDetailResponse):
    user: UserSummary


class SlotResponse(BaseModel):
    start_time: datetime
    end_time: datetime
    available: bool

    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    time_slots: List[SlotResponse]
    bookings: List[BookingResponse]
