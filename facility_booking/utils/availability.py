"""
Availability engine: booking-conflict detection and hourly day slots.

All interval tests use half-open semantics, so a booking that ends exactly
when another starts does not conflict with it.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, Union
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from facility_booking.errors import BookingConflict, InvalidInterval
from facility_booking.models.booking import OVERLAP_GUARD_MESSAGE, Booking, BookingStatus

logger = logging.getLogger(__name__)

OPENING_HOUR = 8
CLOSING_HOUR = 20
SLOT_DURATION = timedelta(hours=1)


@dataclass(frozen=True)
class Slot:
    start_time: datetime
    end_time: datetime
    available: bool


@dataclass(frozen=True)
class DayAvailability:
    slots: List[Slot]
    bookings: List[Booking]


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Return True if [start_a, end_a) and [start_b, end_b) share any instant."""
    return start_a < end_b and start_b < end_a


def validate_interval(start_time: datetime, end_time: datetime) -> None:
    if start_time >= end_time:
        raise InvalidInterval(f"End time must be after start time ({start_time} >= {end_time})")


def find_approved_bookings(
    db: Session,
    facility_id: int,
    range_start: Optional[datetime] = None,
    range_end: Optional[datetime] = None,
    exclude_booking_id: Optional[int] = None,
) -> List[Booking]:
    """
    Read approved bookings of a facility, ordered by start time.

    When a range is given only bookings intersecting [range_start, range_end)
    are returned.
    """
    query = db.query(Booking).filter(
        Booking.facility_id == facility_id,
        Booking.status == BookingStatus.APPROVED,
    )
    if range_end is not None:
        query = query.filter(Booking.start_time < range_end)
    if range_start is not None:
        query = query.filter(Booking.end_time > range_start)
    if exclude_booking_id is not None:
        query = query.filter(Booking.id != exclude_booking_id)
    return query.order_by(Booking.start_time).all()


def has_conflict(start_time: datetime, end_time: datetime, bookings: Sequence[Booking]) -> bool:
    return any(
        intervals_overlap(start_time, end_time, booking.start_time, booking.end_time)
        for booking in bookings
    )


def check_conflict(
    db: Session,
    facility_id: int,
    start_time: datetime,
    end_time: datetime,
    exclude_booking_id: Optional[int] = None,
) -> bool:
    """
    Check whether [start_time, end_time) overlaps an approved booking of the facility.

    The result is advisory: the caller still relies on the storage guard when
    inserting, since another request may commit between check and insert.
    """
    validate_interval(start_time, end_time)
    bookings = find_approved_bookings(
        db, facility_id, start_time, end_time, exclude_booking_id=exclude_booking_id
    )
    conflict = has_conflict(start_time, end_time, bookings)
    if conflict:
        logger.warning(
            f"Conflict for facility_id: {facility_id}, time: {start_time} to {end_time}, "
            f"overlapping bookings: {[booking.id for booking in bookings]}"
        )
    return conflict


def day_bounds(day: Union[date, datetime]):
    if isinstance(day, datetime):
        day = day.date()
    day_start = datetime.combine(day, time.min)
    return day_start, day_start + timedelta(days=1)


def build_day_slots(day: Union[date, datetime], bookings: Sequence[Booking]) -> List[Slot]:
    """Partition the operating window of a day into hourly slots."""
    day_start, _ = day_bounds(day)
    slots = []
    slot_start = day_start + timedelta(hours=OPENING_HOUR)
    closing = day_start + timedelta(hours=CLOSING_HOUR)
    while slot_start < closing:
        slot_end = slot_start + SLOT_DURATION
        slots.append(
            Slot(
                start_time=slot_start,
                end_time=slot_end,
                available=not has_conflict(slot_start, slot_end, bookings),
            )
        )
        slot_start = slot_end
    return slots


def compute_day_slots(db: Session, facility_id: int, day: Union[date, datetime]) -> DayAvailability:
    """
    Compute hourly availability of a facility for one calendar day.

    Approved bookings intersecting the whole day are read once and returned
    alongside the slots. An unknown facility simply has no bookings.
    """
    day_start, day_end = day_bounds(day)
    bookings = find_approved_bookings(db, facility_id, day_start, day_end)
    slots = build_day_slots(day_start, bookings)
    logger.debug(
        f"Facility {facility_id} on {day_start.date()}: "
        f"{sum(slot.available for slot in slots)}/{len(slots)} slots available"
    )
    return DayAvailability(slots=slots, bookings=bookings)


def save_booking(db: Session, booking: Booking) -> Booking:
    """
    Commit a new or changed booking.

    The database rejects an approved booking overlapping another approved one
    of the same facility; that rejection is raised as BookingConflict.
    """
    facility_id, start_time, end_time = booking.facility_id, booking.start_time, booking.end_time
    db.add(booking)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if OVERLAP_GUARD_MESSAGE in str(exc.orig):
            logger.warning(
                f"Storage guard rejected overlapping booking for facility_id: {facility_id}, "
                f"time: {start_time} to {end_time}"
            )
            raise BookingConflict(facility_id, start_time, end_time) from exc
        raise
    db.refresh(booking)
    return booking
