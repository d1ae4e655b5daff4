import pytest
from django.core.cache import cache
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse

from hostel.models import AuditEvent, Floor, Room
from hostel.services import inventory
from hostel.services.inventory import floors_cache_key, list_floors
from hostel.tests.helpers import book

pytestmark = pytest.mark.django_db


@pytest.fixture
def small_layout(settings):
    settings.HOSTEL_FLOOR_COUNT = 2
    settings.HOSTEL_ROOMS_PER_FLOOR = 3
    settings.HOSTEL_ROOM_CAPACITY = 2


def test_seed_endpoint_creates_layout(small_layout, admin_client):
    r = admin_client.post(reverse('hostel_seed'))
    assert r.status_code == 201
    assert r.data['data']['roomsCreated'] == 6
    assert list(Floor.objects.values_list('id', flat=True)) == ['floor-1', 'floor-2']
    second = Room.objects.filter(floor_id='floor-2').order_by('number')
    assert [room.id for room in second] == ['room-4', 'room-5', 'room-6']
    assert all(room.capacity == 2 and room.name == f'Room {room.number}' for room in second)
    assert AuditEvent.objects.filter(action='hostel_seed').count() == 1


def test_seed_twice_conflicts(small_layout, admin_client):
    admin_client.post(reverse('hostel_seed'))
    r = admin_client.post(reverse('hostel_seed'))
    assert r.status_code == 409
    assert r.data['error']['code'] == 'already_seeded'
    assert Room.objects.count() == 6


def test_student_cannot_seed(small_layout, student_client):
    r = student_client.post(reverse('hostel_seed'))
    assert r.status_code == 403
    assert r.data['error']['message'] == 'Admin privileges required.'
    assert not Floor.objects.exists()


def test_seed_command(small_layout):
    call_command('seed_hostel')
    assert Room.objects.count() == 6
    with pytest.raises(CommandError):
        call_command('seed_hostel')


def test_summary_reports_needs_seeding(student_client):
    r = student_client.get(reverse('hostel_summary'))
    assert r.status_code == 200
    assert r.data['data'] == {'totalCapacity': 0, 'totalOccupied': 0, 'available': 0, 'needsSeeding': True}


def test_floor_status_follows_occupancy(small_hostel, make_student, student_client):
    a, b = make_student('a@example.com', 'A'), make_student('b@example.com', 'B')
    book(a, 1)
    book(b, 2)
    book(make_student('c@example.com', 'C'), 2)
    Room.objects.filter(id='room-3').update(maintenance=True)

    r = student_client.get(reverse('hostel_floors'))
    assert r.status_code == 200
    floors = r.data['data']
    assert [f['floorNumber'] for f in floors] == [1, 2]
    rooms = {room['id']: room for room in floors[0]['rooms']}
    assert rooms['room-1']['status'] == 'Partial'
    assert rooms['room-1']['students'] == [{'uid': a.pk, 'name': 'A', 'studentId': f'S{a.pk:04d}'}]
    assert rooms['room-2']['status'] == 'Full'
    assert rooms['room-2']['occupied'] == 2
    assert rooms['room-3']['status'] == 'Maintenance'
    assert floors[1]['rooms'][0]['status'] == 'Available'

    summary = student_client.get(reverse('hostel_summary')).data['data']
    assert summary == {'totalCapacity': 12, 'totalOccupied': 3, 'available': 9, 'needsSeeding': False}


def test_floor_layout_is_cached_and_invalidated_by_booking(small_hostel, student):
    list_floors()
    assert cache.get(floors_cache_key()) is not None
    book(student, 4, floor_number=2)
    assert cache.get(floors_cache_key()) is None
    room4 = list_floors()[1]['rooms'][0]
    assert room4['occupied'] == 1


class _CacheWithHookOnSet:
    """Runs ``hook`` once just before the first ``set`` reaches the real cache."""

    def __init__(self, hook):
        self.hook = hook

    def __getattr__(self, name):
        return getattr(cache, name)

    def set(self, *args, **kwargs):
        if self.hook is not None:
            hook, self.hook = self.hook, None
            hook()
        return cache.set(*args, **kwargs)


def test_layout_built_before_a_booking_commits_is_not_served(small_hostel, student, monkeypatch,
                                                             django_capture_on_commit_callbacks):
    def book_in_between():
        with django_capture_on_commit_callbacks(execute=True):
            book(student, 1)

    monkeypatch.setattr(inventory, 'cache', _CacheWithHookOnSet(book_in_between))
    stale = inventory.list_floors()
    assert stale[0]['rooms'][0]['occupied'] == 0

    monkeypatch.setattr(inventory, 'cache', cache)
    room1 = list_floors()[0]['rooms'][0]
    assert room1['occupied'] == 1
    assert room1['students'][0]['uid'] == student.pk


def test_admin_toggles_maintenance(small_hostel, admin_client, student_client):
    r = admin_client.post(reverse('hostel_maintenance'),
                          {'floorId': 'floor-1', 'roomId': 'room-1', 'maintenance': True}, format='json')
    assert r.status_code == 200
    assert Room.objects.get(id='room-1').maintenance is True
    floors = student_client.get(reverse('hostel_floors')).data['data']
    assert floors[0]['rooms'][0]['status'] == 'Maintenance'


def test_maintenance_unknown_room_is_404(small_hostel, admin_client):
    r = admin_client.post(reverse('hostel_maintenance'),
                          {'floorId': 'floor-1', 'roomId': 'room-5', 'maintenance': True}, format='json')
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'


def test_booking_before_seeding_conflicts(student_client):
    r = student_client.post(reverse('book_room'), {'floorId': 'floor-1', 'roomId': 'room-1',
                                                   'fullName': 'Asha Rao', 'studentId': 'CS-101'}, format='json')
    assert r.status_code == 409
    assert r.data['error'] == {'code': 'not_seeded', 'message': 'Hostel data has not been seeded yet.'}


def test_room_change_before_seeding_conflicts(student_client):
    r = student_client.post(reverse('room_change_submit'), {'reason': 'Too noisy'}, format='json')
    assert r.status_code == 409
    assert r.data['error']['code'] == 'not_seeded'
