from facility_booking.errors import InvalidTransition
from facility_booking.models.booking import BookingStatus
from facility_booking.models.user import UserRole

AUTO_APPROVED_ROLES = {UserRole.FACULTY, UserRole.STAFF}

ALLOWED_TRANSITIONS = {
    (BookingStatus.PENDING, BookingStatus.APPROVED),
    (BookingStatus.PENDING, BookingStatus.REJECTED),
    (BookingStatus.APPROVED, BookingStatus.CANCELLED),
}


def initial_status(role: UserRole) -> BookingStatus:
    """Faculty and staff bookings skip the approval queue."""
    if UserRole(role) in AUTO_APPROVED_ROLES:
        return BookingStatus.APPROVED
    return BookingStatus.PENDING


def validate_transition(current: BookingStatus, new: BookingStatus) -> None:
    if (current, new) not in ALLOWED_TRANSITIONS:
        raise InvalidTransition(BookingStatus(current).value, BookingStatus(new).value)
