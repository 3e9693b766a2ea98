import enum
from datetime import datetime
from sqlalchemy import (
    DDL,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    event,
)
from sqlalchemy.orm import relationship
from facility_booking.db import Base


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


OVERLAP_GUARD_MESSAGE = "bookings_no_overlap_per_facility"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    facility_id = Column(Integer, ForeignKey("facilities.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING, index=True)
    purpose = Column(String, nullable=False)
    attendees = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    facility = relationship("Facility", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="booking_time_valid"),
        CheckConstraint("attendees >= 1", name="booking_attendees_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, facility={self.facility_id}, "
            f"{self.start_time}-{self.end_time}, status={self.status})>"
        )


# Approved bookings of one facility must never overlap. The check runs inside
# the inserting/updating statement so two requests racing past the
# application-level conflict check cannot both commit.
_OVERLAP_EXISTS = """
    SELECT RAISE(ABORT, '{message}')
    WHERE EXISTS (
        SELECT 1 FROM bookings b
        WHERE b.facility_id = NEW.facility_id
          AND b.status = 'APPROVED'
          AND b.start_time < NEW.end_time
          AND NEW.start_time < b.end_time
          {extra}
    );
"""

event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        "CREATE TRIGGER IF NOT EXISTS bookings_no_overlap_insert "
        "BEFORE INSERT ON bookings WHEN NEW.status = 'APPROVED' BEGIN "
        + _OVERLAP_EXISTS.format(message=OVERLAP_GUARD_MESSAGE, extra="")
        + " END"
    ).execute_if(dialect="sqlite"),
)

event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        "CREATE TRIGGER IF NOT EXISTS bookings_no_overlap_update "
        "BEFORE UPDATE OF status, start_time, end_time, facility_id ON bookings "
        "WHEN NEW.status = 'APPROVED' BEGIN "
        + _OVERLAP_EXISTS.format(message=OVERLAP_GUARD_MESSAGE, extra="AND b.id != NEW.id")
        + " END"
    ).execute_if(dialect="sqlite"),
)
