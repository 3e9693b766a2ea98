from fastapi import status

from facility_booking.models.booking import Booking, BookingStatus
from facility_booking.models.user import UserRole

from tests.conf_tests import (
    at,
    client,
    clear_db,
    headers_for,
    test_db,
    make_user,
    test_user,
    auth_headers,
    faculty_headers,
    admin_headers,
    test_facility,
    make_booking,
    approved_booking,
)


def booking_payload(facility_id, start_time, end_time, **extra):
    payload = {
        "facility_id": facility_id,
        "start_time": start_time.isoformat(),
        "end_time": end_time.isoformat(),
        "purpose": "Study group",
        "attendees": 8,
    }
    payload.update(extra)
    return payload


# pylint: disable-next=redefined-outer-name
def test_student_booking_is_pending(auth_headers, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10), notes="Bring markers"),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["facility_id"] == test_facility.id
    assert data["attendees"] == 8
    assert data["notes"] == "Bring markers"
    assert data["start_time"] == at(9).isoformat()
    assert data["end_time"] == at(10).isoformat()


# pylint: disable-next=redefined-outer-name
def test_faculty_booking_is_approved(faculty_headers, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=faculty_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "APPROVED"


# pylint: disable-next=redefined-outer-name
def test_staff_booking_is_approved(make_user, test_facility):
    headers = headers_for(make_user(UserRole.STAFF))
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "APPROVED"


# pylint: disable-next=redefined-outer-name
def test_create_booking_unauthorized(test_facility):
    response = client.post("/bookings/", json=booking_payload(test_facility.id, at(9), at(10)))
    assert response.status_code in [
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
    ]


# pylint: disable-next=redefined-outer-name
def test_create_booking_invalid_interval(auth_headers, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(10), at(10)), headers=auth_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "End time must be after start time"


# pylint: disable-next=redefined-outer-name
def test_create_booking_facility_not_found(auth_headers):
    response = client.post("/bookings/", json=booking_payload(999, at(9), at(10)), headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_create_booking_inactive_facility(auth_headers, test_db, test_facility):
    test_facility.is_active = False
    test_db.commit()
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=auth_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


# pylint: disable-next=redefined-outer-name
def test_create_booking_insufficient_capacity(auth_headers, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10), attendees=31),
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "capacity insufficient" in response.json()["detail"]


# pylint: disable-next=redefined-outer-name
def test_create_booking_requires_attendee(auth_headers, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10), attendees=0),
        headers=auth_headers,
    )
    assert response.status_code == 422


# pylint: disable-next=redefined-outer-name
def test_create_booking_overlapping(auth_headers, test_facility, approved_booking):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(11, 30), at(12, 30)), headers=auth_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert "conflicts" in response.json()["detail"]


# pylint: disable-next=redefined-outer-name
def test_create_booking_containing_existing(faculty_headers, test_facility, approved_booking):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(13)), headers=faculty_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT


# pylint: disable-next=redefined-outer-name
def test_create_booking_adjacent_is_allowed(faculty_headers, test_facility, approved_booking):
    before = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=faculty_headers
    )
    after = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(12), at(13)), headers=faculty_headers
    )
    assert before.status_code == status.HTTP_201_CREATED
    assert after.status_code == status.HTTP_201_CREATED


# pylint: disable-next=redefined-outer-name
def test_pending_bookings_do_not_block(auth_headers, faculty_headers, test_facility):
    first = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=auth_headers
    )
    second = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=faculty_headers
    )
    assert first.json()["status"] == "PENDING"
    assert second.status_code == status.HTTP_201_CREATED
    assert second.json()["status"] == "APPROVED"


# pylint: disable-next=redefined-outer-name
def test_timezone_aware_times_are_stored_in_utc(faculty_headers, test_facility):
    payload = booking_payload(test_facility.id, at(9), at(10))
    payload["start_time"] = at(11).isoformat() + "+02:00"
    payload["end_time"] = at(12).isoformat() + "+02:00"
    response = client.post("/bookings/", json=payload, headers=faculty_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["start_time"] == at(9).isoformat()
    assert response.json()["end_time"] == at(10).isoformat()


# pylint: disable-next=redefined-outer-name
def test_get_my_bookings(auth_headers, test_user, test_facility, make_booking, make_user):
    older = make_booking(at(9), at(10), status=BookingStatus.PENDING)
    newer = make_booking(at(14), at(15), status=BookingStatus.PENDING)
    make_booking(at(16), at(17), user=make_user())

    response = client.get("/bookings/my", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["id"] for item in data] == [newer.id, older.id]
    assert data[0]["facility"]["name"] == test_facility.name


# pylint: disable-next=redefined-outer-name
def test_get_booking_owner_and_admin(auth_headers, admin_headers, approved_booking):
    owner = client.get(f"/bookings/{approved_booking.id}", headers=auth_headers)
    admin = client.get(f"/bookings/{approved_booking.id}", headers=admin_headers)
    assert owner.status_code == status.HTTP_200_OK
    assert admin.status_code == status.HTTP_200_OK
    assert owner.json()["status"] == "APPROVED"


# pylint: disable-next=redefined-outer-name
def test_get_booking_other_user_forbidden(faculty_headers, approved_booking):
    response = client.get(f"/bookings/{approved_booking.id}", headers=faculty_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


# pylint: disable-next=redefined-outer-name
def test_get_booking_not_found(auth_headers):
    response = client.get("/bookings/999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


# pylint: disable-next=redefined-outer-name
def test_created_booking_is_persisted(faculty_headers, test_db, test_facility):
    response = client.post(
        "/bookings/", json=booking_payload(test_facility.id, at(9), at(10)), headers=faculty_headers
    )
    booking = test_db.query(Booking).filter(Booking.id == response.json()["id"]).first()
    assert booking.status == BookingStatus.APPROVED
    assert booking.start_time == at(9)
