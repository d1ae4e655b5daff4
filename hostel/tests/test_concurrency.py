"""
Bookings and room-change approvals racing for the last free bed.

These tests run against committed data with one database connection per
thread, so the row locks (SQLite's write lock in the default setup)
decide which caller wins.
"""
import threading

import pytest
from django.db import connection

from hostel.exceptions import RoomUnavailable
from hostel.models import Booking, RoomChangeRequest
from hostel.services.room_change import approve_room_change, submit_room_change
from hostel.tests.helpers import book

pytestmark = pytest.mark.django_db(transaction=True)


def race(*calls):
    """Start every call at the same moment on its own thread; return results or raised errors."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def run(index, call):
        try:
            barrier.wait()
            outcomes[index] = call()
        except Exception as exc:
            outcomes[index] = exc
        finally:
            connection.close()

    threads = [threading.Thread(target=run, args=(i, call)) for i, call in enumerate(calls)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)
    return outcomes


def errors(outcomes):
    return [type(o) for o in outcomes if isinstance(o, Exception)]


@pytest.fixture
def last_free_bed(small_hostel, make_student):
    """room-2 has one bed left; both students in room-1 asked to move there."""
    book(make_student('resident@example.com', 'Resident'), 2)
    requests = []
    for email, name in (('a@example.com', 'A'), ('b@example.com', 'B')):
        user = make_student(email, name)
        book(user, 1)
        requests.append(submit_room_change(user, reason='Quieter room',
                                           preferred_floor_id='floor-1', preferred_room_id='room-2'))
    return requests


def test_two_approvals_cannot_overfill_a_room(last_free_bed, admin_user):
    first, second = last_free_bed
    outcomes = race(lambda: approve_room_change(first.pk, admin_user),
                    lambda: approve_room_change(second.pk, admin_user))

    assert errors(outcomes) == [RoomUnavailable]
    assert sum(isinstance(o, RoomChangeRequest) for o in outcomes) == 1
    assert Booking.objects.filter(room_id='room-2').count() == 2
    assert Booking.objects.filter(room_id='room-1').count() == 1
    assert sorted(RoomChangeRequest.objects.values_list('status', flat=True)) == ['Approved', 'Pending']


def test_booking_and_approval_race_for_the_last_bed(last_free_bed, admin_user, make_student):
    newcomer = make_student('new@example.com', 'Newcomer')
    outcomes = race(lambda: approve_room_change(last_free_bed[0].pk, admin_user),
                    lambda: book(newcomer, 2))

    assert errors(outcomes) == [RoomUnavailable]
    assert Booking.objects.filter(room_id='room-2').count() == 2
    moved = RoomChangeRequest.objects.get(pk=last_free_bed[0].pk).status == 'Approved'
    assert Booking.objects.filter(user=newcomer).exists() is not moved


def test_concurrent_bookings_fill_a_room_exactly(small_hostel, make_student):
    students = [make_student(f's{i}@example.com', f'S{i}') for i in range(4)]
    outcomes = race(*[lambda s=s: book(s, 3) for s in students])

    assert errors(outcomes) == [RoomUnavailable, RoomUnavailable]
    assert Booking.objects.filter(room_id='room-3').count() == 2
