"""
Room booking.  The room row is locked for the whole check-and-insert so
two students can never take the last free slot at the same time.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import IntegrityError, transaction

from hostel.exceptions import AlreadyBooked, RoomUnavailable
from hostel.models import Booking, User
from hostel.services import events
from hostel.services.audit import log_action
from hostel.services.inventory import ensure_seeded, floors_changed, get_room, occupancy

logger = logging.getLogger(__name__)


def get_booking(user: User) -> Optional[Booking]:
    return Booking.objects.select_related('room__floor').filter(user=user).first()


def booking_summary(user: User) -> Optional[dict]:
    booking = get_booking(user)
    return booking.summary() if booking else None


def book_room(user: User, *, floor_id: str, room_id: str, full_name: str, student_id: str) -> Booking:
    ensure_seeded()
    with transaction.atomic():
        room = get_room(floor_id, room_id, lock=True)
        if Booking.objects.filter(user=user).exists():
            raise AlreadyBooked()
        if room.maintenance:
            raise RoomUnavailable('This room is under maintenance.')
        if occupancy(room) >= room.capacity:
            logger.warning("Booking refused: %s is full (user=%s)", room.id, user.pk)
            raise RoomUnavailable('This room is already full.')
        try:
            with transaction.atomic():
                booking = Booking.objects.create(
                    user=user, room=room, full_name=full_name, student_id=student_id,
                )
        except IntegrityError:
            raise AlreadyBooked()
        booking = get_booking(user)
        events.publish(events.BOOKINGS, 'created', booking.pk, user_id=user.pk, data=booking.summary())
        floors_changed('booked', room.id)
    logger.info("User %s booked %s", user.pk, room.id)
    log_action(user=user, action='room_book', object_type='room', object_id=room.id,
               detail={'studentId': student_id})
    return booking
