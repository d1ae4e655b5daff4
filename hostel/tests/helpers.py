from rest_framework.test import APIClient

from hostel.services.bookings import book_room


def client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def book(user, room_number: int, floor_number: int = 1, student_id: str = None):
    """Book ``room-<room_number>`` on ``floor-<floor_number>`` for ``user``."""
    return book_room(
        user,
        floor_id=f'floor-{floor_number}',
        room_id=f'room-{room_number}',
        full_name=user.display_name,
        student_id=student_id or f'S{user.pk:04d}',
    )
