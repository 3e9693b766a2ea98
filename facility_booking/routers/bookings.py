from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from facility_booking.db import get_db
from facility_booking.errors import BookingConflict, InvalidInterval
from facility_booking.models.booking import Booking
from facility_booking.models.facility import Facility
from facility_booking.models.user import UserRole
from facility_booking.schemas.booking import BookingCreate, BookingDetailResponse, BookingResponse
from facility_booking.utils.auth import get_current_user
from facility_booking.utils.availability import check_conflict, save_booking, validate_interval
from facility_booking.utils.lifecycle import initial_status
import logging

logger = logging.getLogger(__name__)

CONFLICT_DETAIL = "This time slot conflicts with existing bookings"

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
    description="Request a facility for a time range. Faculty and staff bookings are approved immediately.",
)
def create_booking(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    """
    Request a facility for a time range.
    Requires authentication.

    - **facility_id**: ID of the facility to book.
    - **start_time** / **end_time**: requested range; end must be after start.
    - **purpose**: purpose of the booking.
    - **attendees**: expected attendees, at most the facility capacity.
    - **notes**: optional notes for the administrator.

    Returns the created booking, APPROVED or PENDING depending on the caller's role.
    """
    logger.debug(f"Creating booking for user: {current_user['username']}, facility_id: {booking.facility_id}")

    try:
        validate_interval(booking.start_time, booking.end_time)
    except InvalidInterval:
        logger.error(f"Invalid interval: {booking.start_time} to {booking.end_time}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="End time must be after start time")

    facility = db.query(Facility).filter(Facility.id == booking.facility_id).first()
    if not facility:
        logger.error(f"Facility not found: {booking.facility_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Facility not found")
    if not facility.is_active:
        logger.error(f"Facility inactive: {booking.facility_id}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Facility is not available for booking")
    if facility.capacity < booking.attendees:
        logger.error(f"Facility capacity insufficient: {facility.capacity} < {booking.attendees}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Facility capacity insufficient")

    if check_conflict(db, booking.facility_id, booking.start_time, booking.end_time):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=CONFLICT_DETAIL)

    db_booking = Booking(
        user_id=current_user["id"],
        facility_id=booking.facility_id,
        start_time=booking.start_time,
        end_time=booking.end_time,
        purpose=booking.purpose,
        attendees=booking.attendees,
        notes=booking.notes or None,
        status=initial_status(current_user["role"]),
    )
    try:
        save_booking(db, db_booking)
    except BookingConflict:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=CONFLICT_DETAIL)
    logger.info(f"Created booking: {db_booking.id}, status: {db_booking.status.value}")
    return db_booking


@router.get(
    "/my",
    response_model=List[BookingDetailResponse],
    summary="List my bookings",
    description="Retrieve the caller's bookings, latest start first.",
)
def get_my_bookings(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    bookings = (
        db.query(Booking)
        .filter(Booking.user_id == current_user["id"])
        .order_by(Booking.start_time.desc())
        .all()
    )
    logger.debug(f"Retrieved {len(bookings)} bookings for user: {current_user['username']}")
    return bookings


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get a booking by ID",
    description="Retrieve a booking. Only its owner or an administrator may read it.",
)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user),
):
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not booking:
        logger.error(f"Booking not found: {booking_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

    if booking.user_id != current_user["id"] and current_user["role"] != UserRole.ADMIN:
        logger.error(f"User {current_user['username']} not authorized to view booking {booking_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to view this booking")
    return booking
