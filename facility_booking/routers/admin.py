import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from facility_booking.db import get_db
from facility_booking.errors import BookingConflict, InvalidTransition
from facility_booking.models.booking import Booking, BookingStatus
from facility_booking.models.facility import Facility
from facility_booking.schemas.booking import AdminBookingResponse, BookingStatusUpdate
from facility_booking.schemas.facility import FacilityCreate, FacilityResponse, FacilityUpdate
from facility_booking.utils.auth import require_admin
from facility_booking.utils.availability import check_conflict, save_booking
from facility_booking.utils.lifecycle import validate_transition

logger = logging.getLogger(__name__)

NULLABLE_FACILITY_FIELDS = {"description", "floor"}

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/bookings/", response_model=List[AdminBookingResponse])
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    """
    Retrieve bookings, newest requests first.

    - **status**: only bookings in this status.
    """
    query = db.query(Booking)
    if status_filter is not None:
        query = query.filter(Booking.status == status_filter)
    bookings = query.order_by(Booking.created_at.desc(), Booking.id.desc()).offset(skip).limit(limit).all()
    logger.debug(f"Retrieved {len(bookings)} bookings")
    return bookings


@router.patch("/bookings/{booking_id}", response_model=AdminBookingResponse)
def update_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(require_admin),
):
    """
    Approve, reject or cancel a booking.

    Only PENDING -> APPROVED, PENDING -> REJECTED and APPROVED -> CANCELLED
    are accepted. Approving re-checks the facility for overlapping approved
    bookings.
    """
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        logger.error(f"Booking not found: {booking_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    try:
        validate_transition(booking.status, update.status)
    except InvalidTransition as e:
        logger.error(f"Rejected status change for booking {booking_id}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if update.status == BookingStatus.APPROVED and check_conflict(
        db, booking.facility_id, booking.start_time, booking.end_time, exclude_booking_id=booking.id
    ):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking overlaps an approved booking for this facility",
        )

    booking.status = update.status
    if update.status == BookingStatus.REJECTED:
        booking.rejection_reason = update.rejection_reason or None
    elif update.status == BookingStatus.CANCELLED:
        booking.cancellation_reason = update.cancellation_reason or None

    try:
        save_booking(db, booking)
    except BookingConflict:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Booking overlaps an approved booking for this facility",
        )
    logger.info(f"Admin {current_user['username']} set booking {booking_id} to {booking.status.value}")
    return booking


@router.get("/facilities/", response_model=List[FacilityResponse])
def list_facilities(db: Session = Depends(get_db)):
    """Retrieve all facilities, including deactivated ones."""
    return db.query(Facility).order_by(Facility.name).all()


@router.post("/facilities/", response_model=FacilityResponse, status_code=status.HTTP_201_CREATED)
def create_facility(facility: FacilityCreate, db: Session = Depends(get_db)):
    """Add a facility to the catalog."""
    db_facility = Facility(**facility.model_dump())
    db.add(db_facility)
    db.commit()
    db.refresh(db_facility)
    logger.info(f"Created facility: {db_facility.id} ({db_facility.name})")
    return db_facility


@router.put("/facilities/{facility_id}", response_model=FacilityResponse)
def update_facility(facility_id: int, facility_update: FacilityUpdate, db: Session = Depends(get_db)):
    """Update a facility's details; only the fields sent are changed."""
    db_facility = db.query(Facility).filter(Facility.id == facility_id).first()
    if not db_facility:
        logger.error(f"Facility not found: {facility_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility not found")

    update_data = facility_update.model_dump(exclude_unset=True)
    if "capacity" in update_data and update_data["capacity"] is None:
        logger.error(f"Null capacity sent for facility {facility_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Capacity must be a positive number")
    # Explicit nulls on required columns leave the stored value unchanged
    update_data = {
        key: value for key, value in update_data.items()
        if value is not None or key in NULLABLE_FACILITY_FIELDS
    }
    for key, value in update_data.items():
        setattr(db_facility, key, value)

    db.commit()
    db.refresh(db_facility)
    return db_facility


@router.delete("/facilities/{facility_id}")
def delete_facility(facility_id: int, db: Session = Depends(get_db)):
    """
    Delete a facility.

    A facility with upcoming approved bookings is only deactivated so those
    bookings keep their facility.
    """
    db_facility = db.query(Facility).filter(Facility.id == facility_id).first()
    if not db_facility:
        logger.error(f"Facility not found: {facility_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility not found")

    active_bookings = db.query(Booking).filter(
        Booking.facility_id == facility_id,
        Booking.status == BookingStatus.APPROVED,
        Booking.start_time >= datetime.now(),
    ).count()

    if active_bookings > 0:
        db_facility.is_active = False
        db.commit()
        logger.info(f"Deactivated facility {facility_id}, {active_bookings} upcoming bookings")
        return {"message": "Facility deactivated due to active bookings"}

    db.delete(db_facility)
    db.commit()
    logger.info(f"Deleted facility: {facility_id}")
    return {"message": "Facility deleted successfully"}
