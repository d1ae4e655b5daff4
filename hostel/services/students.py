"""
Personal details kept by students, and the admin-side student database
that joins those details with each student's current room.
"""
from __future__ import annotations

import logging

from django.db import transaction

from hostel.models import Booking, StudentDetails, User
from hostel.services import events

logger = logging.getLogger(__name__)

# API name -> model field
DETAIL_FIELDS = {
    'fullName': 'full_name',
    'phoneNumber': 'phone_number',
    'homeAddress': 'home_address',
    'fatherName': 'father_name',
    'fatherMobile': 'father_mobile',
    'motherName': 'mother_name',
    'motherMobile': 'mother_mobile',
}


def format_details(details: StudentDetails) -> dict:
    data = {key: getattr(details, attr) for key, attr in DETAIL_FIELDS.items()}
    data['userId'] = details.user_id
    data['updatedAt'] = details.updated_at.isoformat() if details.updated_at else None
    return data


def get_details(user: User) -> dict:
    details = StudentDetails.objects.filter(user=user).first()
    if details is None:
        details = StudentDetails(user=user, full_name=user.display_name)
    return format_details(details)


def save_details(user: User, fields: dict) -> StudentDetails:
    """Merge ``fields`` (API names) into the user's details, creating them if needed."""
    with transaction.atomic():
        details, created = StudentDetails.objects.select_for_update().get_or_create(
            user=user, defaults={'full_name': user.display_name},
        )
        for key, value in fields.items():
            setattr(details, DETAIL_FIELDS[key], value)
        details.save()
        events.publish(events.STUDENT_DETAILS, 'created' if created else 'updated', details.pk,
                       user_id=user.pk, data=format_details(details))
    logger.info("Personal details %s for %s", 'created' if created else 'updated', user.pk)
    return details


def list_student_records() -> list[dict]:
    bookings = {
        b.user_id: b
        for b in Booking.objects.select_related('room__floor')
    }
    records = []
    for details in StudentDetails.objects.all():
        data = format_details(details)
        booking = bookings.get(details.user_id)
        data['roomName'] = booking.room.name if booking else None
        data['floorNumber'] = booking.room.floor.floor_number if booking else None
        records.append(data)
    records.sort(key=lambda r: (r['fullName'] or '').lower())
    return records
