"""Demo data: one user per role, four facilities and an approved lecture tomorrow."""
import logging
from datetime import datetime, time, timedelta
from sqlalchemy.orm import Session
from facility_booking.models.booking import Booking, BookingStatus
from facility_booking.models.facility import Facility, FacilityType
from facility_booking.models.user import User, UserRole
from facility_booking.utils.auth import get_password_hash

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("admin", "admin@school.edu", "Admin User", UserRole.ADMIN, "admin123"),
    ("john.doe", "john.doe@school.edu", "John Doe", UserRole.FACULTY, "faculty123"),
    ("jane.smith", "jane.smith@school.edu", "Jane Smith", UserRole.STUDENT, "student123"),
]

DEMO_FACILITIES = [
    {
        "name": "Room A101",
        "type": FacilityType.CLASSROOM,
        "capacity": 30,
        "description": "Modern classroom with interactive whiteboard and projector",
        "location": "Academic Building",
        "building": "Academic Building",
        "floor": 1,
        "equipment": ["Projector", "Interactive Whiteboard", "Sound System", "WiFi"],
        "amenities": ["Air Conditioning", "Natural Light", "Accessible"],
    },
    {
        "name": "Science Lab B201",
        "type": FacilityType.LAB,
        "capacity": 20,
        "description": "Fully equipped chemistry laboratory with fume hoods",
        "location": "Science Building",
        "building": "Science Building",
        "floor": 2,
        "equipment": ["Fume Hoods", "Lab Benches", "Chemical Storage", "Emergency Shower"],
        "amenities": ["Ventilation System", "Safety Equipment", "Accessible"],
    },
    {
        "name": "Main Auditorium",
        "type": FacilityType.AUDITORIUM,
        "capacity": 200,
        "description": "Large auditorium perfect for presentations and events",
        "location": "Main Building",
        "building": "Main Building",
        "floor": 1,
        "equipment": ["Stage", "Microphone System", "Projection System", "Lighting"],
        "amenities": ["Air Conditioning", "Tiered Seating", "Accessible", "Parking Nearby"],
    },
    {
        "name": "Conference Room C305",
        "type": FacilityType.MEETING_ROOM,
        "capacity": 12,
        "description": "Intimate meeting room ideal for small group discussions",
        "location": "Administration Building",
        "building": "Administration Building",
        "floor": 3,
        "equipment": ["Conference Table", "TV Display", "Video Conferencing", "WiFi"],
        "amenities": ["Coffee Station", "Whiteboards", "Natural Light"],
    },
]


def seed_database(db: Session) -> bool:
    """Insert demo data into an empty database. Returns False if users already exist."""
    if db.query(User).first():
        logger.debug("Database already populated, skipping seed")
        return False

    users = [
        User(
            username=username,
            email=email,
            full_name=full_name,
            role=role,
            hashed_password=get_password_hash(password),
        )
        for username, email, full_name, role, password in DEMO_USERS
    ]
    facilities = [Facility(**data) for data in DEMO_FACILITIES]
    db.add_all(users + facilities)
    db.flush()

    tomorrow = datetime.combine(datetime.now().date() + timedelta(days=1), time.min)
    db.add(
        Booking(
            user_id=users[1].id,
            facility_id=facilities[0].id,
            start_time=tomorrow + timedelta(hours=10),
            end_time=tomorrow + timedelta(hours=12),
            purpose="Mathematics Lecture",
            attendees=25,
            status=BookingStatus.APPROVED,
        )
    )
    db.commit()
    logger.info(f"Seeded {len(users)} users and {len(facilities)} facilities")
    return True
