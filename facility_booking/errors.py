class InvalidInterval(ValueError):
    """Raised when a booking interval does not end after it starts."""


class BookingConflict(Exception):
    """Raised when a time range overlaps an approved booking of the facility."""

    def __init__(self, facility_id, start_time, end_time):
        super().__init__(
            f"Facility {facility_id} already has an approved booking between "
            f"{start_time} and {end_time}"
        )
        self.facility_id = facility_id
        self.start_time = start_time
        self.end_time = end_time


class InvalidTransition(ValueError):
    """Raised for a booking status change the lifecycle does not allow."""

    def __init__(self, current, new):
        super().__init__(f"Cannot change booking status from {current} to {new}")
        self.current = current
        self.new = new
