import enum
from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import relationship
from facility_booking.db import Base


class FacilityType(str, enum.Enum):
    CLASSROOM = "CLASSROOM"
    AUDITORIUM = "AUDITORIUM"
    LAB = "LAB"
    MEETING_ROOM = "MEETING_ROOM"
    STUDY_ROOM = "STUDY_ROOM"


class Facility(Base):
    __tablename__ = "facilities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    type = Column(Enum(FacilityType), nullable=False)
    capacity = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=False)
    building = Column(String, nullable=False)
    floor = Column(Integer, nullable=True)
    equipment = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    bookings = relationship(
        "Booking", back_populates="facility", cascade="all, delete-orphan"
    )
