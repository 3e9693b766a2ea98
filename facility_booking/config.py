import logging
import os


DATABASE_URL = os.getenv(
    "FACILITY_BOOKING_DATABASE_URL", "sqlite:///./data/facility_booking.db"
)

# JWT configuration
SECRET_KEY = os.getenv("FACILITY_BOOKING_SECRET_KEY", "change-me-facility-booking-secret")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("FACILITY_BOOKING_TOKEN_EXPIRE_MINUTES", "30"))


def resolve_log_level(name):
    """Unknown level names fall back to INFO."""
    name = (name or "").upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return "INFO"


LOG_LEVEL = resolve_log_level(os.getenv("FACILITY_BOOKING_LOG_LEVEL", "INFO"))
SEED_DATABASE = os.getenv("FACILITY_BOOKING_SEED", "0") == "1"
