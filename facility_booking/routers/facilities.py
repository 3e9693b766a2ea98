import logging
from datetime import date, datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from facility_booking.db import get_db
from facility_booking.models.booking import Booking, BookingStatus
from facility_booking.models.facility import Facility, FacilityType
from facility_booking.schemas.booking import AvailabilityResponse, BookingResponse, SlotResponse
from facility_booking.schemas.facility import FacilityDetailResponse, FacilityResponse
from facility_booking.utils.availability import compute_day_slots

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/facilities",
    tags=["facilities"],
)


@router.get("/", response_model=List[FacilityResponse])
def get_facilities(
    type: Optional[FacilityType] = None,
    capacity: Optional[int] = Query(None, ge=1, description="Minimum capacity"),
    building: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Retrieve active facilities ordered by name.

    - **type**: only facilities of this type.
    - **capacity**: only facilities holding at least this many people.
    - **building**: case-insensitive match on the building name.
    """
    query = db.query(Facility).filter(Facility.is_active.is_(True))
    if type is not None:
        query = query.filter(Facility.type == type)
    if capacity is not None:
        query = query.filter(Facility.capacity >= capacity)
    if building:
        query = query.filter(Facility.building.ilike(f"%{building}%"))
    facilities = query.order_by(Facility.name).all()
    logger.debug(f"Retrieved {len(facilities)} facilities")
    return facilities


@router.get("/{facility_id}", response_model=FacilityDetailResponse)
def get_facility(facility_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a facility together with its upcoming approved bookings.
    """
    facility = db.query(Facility).filter(Facility.id == facility_id).first()
    if not facility:
        logger.error(f"Facility not found: {facility_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility not found")

    upcoming = db.query(Booking).filter(
        Booking.facility_id == facility_id,
        Booking.status == BookingStatus.APPROVED,
        Booking.start_time >= datetime.now(),
    ).order_by(Booking.start_time).all()

    return FacilityDetailResponse(
        **FacilityResponse.model_validate(facility).model_dump(),
        upcoming_bookings=[BookingResponse.model_validate(booking) for booking in upcoming],
    )


@router.get(
    "/{facility_id}/availability",
    response_model=AvailabilityResponse,
    summary="Hourly availability for a day",
    description="Split 08:00-20:00 of the given date into hourly slots marked available or booked.",
)
def get_availability(
    facility_id: int,
    day: Optional[date] = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    """
    - **facility_id**: facility to inspect.
    - **date**: calendar day (e.g., 2025-05-04).

    Returns the 12 hourly slots and the approved bookings of that day.
    """
    if day is None:
        logger.error(f"Availability requested without date for facility_id: {facility_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Date parameter is required")

    availability = compute_day_slots(db, facility_id, day)
    return AvailabilityResponse(
        time_slots=[SlotResponse.model_validate(slot) for slot in availability.slots],
        bookings=[BookingResponse.model_validate(booking) for booking in availability.bookings],
    )
