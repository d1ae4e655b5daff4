"""
Floors and rooms: seeding, the cached floor layout and occupancy.
"""
from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Optional

from django.conf import settings
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.db.models import Sum
from rest_framework.exceptions import NotFound

from hostel.exceptions import HostelAlreadySeeded, HostelNotSeeded
from hostel.models import Booking, Floor, Room
from hostel.services import events
from hostel.services.audit import log_action

logger = logging.getLogger(__name__)

FLOORS_CACHE_KEY = 'hostel:floors'
FLOORS_GENERATION_KEY = 'hostel:floors:generation'


def room_status(room: Room, occupied: int) -> str:
    if room.maintenance:
        return Room.STATUS_MAINTENANCE
    if occupied >= room.capacity:
        return Room.STATUS_FULL
    if occupied > 0:
        return Room.STATUS_PARTIAL
    return Room.STATUS_AVAILABLE


def room_ref(room: Optional[Room]) -> Optional[dict]:
    """The ``{floorId, roomId, roomName, floorNumber}`` snapshot used across the API."""
    if room is None:
        return None
    return {
        'floorId': room.floor_id,
        'roomId': room.id,
        'roomName': room.name,
        'floorNumber': room.floor.floor_number,
    }


def ensure_seeded() -> None:
    if not Floor.objects.exists():
        raise HostelNotSeeded()


def get_room(floor_id: str, room_id: str, *, lock: bool = False, message: str = 'Room not found.') -> Room:
    """Return the room ``room_id`` on floor ``floor_id``, optionally row-locked."""
    qs = Room.objects.select_for_update() if lock else Room.objects.select_related('floor')
    room = qs.filter(id=room_id, floor_id=floor_id).first()
    if room is None:
        raise NotFound(message)
    return room


def occupancy(room: Room) -> int:
    return Booking.objects.filter(room=room).count()


def _floors_generation() -> int:
    generation = cache.get(FLOORS_GENERATION_KEY)
    if generation is None:
        # start from the clock so a lost counter never revives an old layout key
        cache.add(FLOORS_GENERATION_KEY, time.time_ns(), None)
        generation = cache.get(FLOORS_GENERATION_KEY)
    return generation


def floors_cache_key(generation: Optional[int] = None) -> str:
    if generation is None:
        generation = _floors_generation()
    return f'{FLOORS_CACHE_KEY}:{generation}'


def _bump_floors_generation() -> None:
    try:
        cache.incr(FLOORS_GENERATION_KEY)
    except ValueError:
        cache.add(FLOORS_GENERATION_KEY, time.time_ns(), None)


def invalidate_floor_cache() -> None:
    """
    Move the layout to a new cache generation now and again once the
    surrounding transaction commits.  A reader that built its layout from
    rows read before the commit stores it under the old generation, which
    nobody reads any more.
    """
    _bump_floors_generation()
    transaction.on_commit(_bump_floors_generation)


def floors_changed(action: str, object_id=None) -> None:
    invalidate_floor_cache()
    events.publish(events.FLOORS, action, object_id)


def seed_hostel(user=None) -> int:
    """Create the initial floors and rooms.  Returns the number of rooms created."""
    floor_count = settings.HOSTEL_FLOOR_COUNT
    per_floor = settings.HOSTEL_ROOMS_PER_FLOOR
    capacity = settings.HOSTEL_ROOM_CAPACITY
    try:
        with transaction.atomic():
            if Floor.objects.exists():
                raise HostelAlreadySeeded()
            Floor.objects.bulk_create([
                Floor(id=f'floor-{i}', floor_number=i, name=f'Floor {i}')
                for i in range(1, floor_count + 1)
            ])
            rooms = []
            for i in range(1, floor_count + 1):
                for j in range(1, per_floor + 1):
                    number = (i - 1) * per_floor + j
                    rooms.append(Room(
                        id=f'room-{number}',
                        floor_id=f'floor-{i}',
                        number=number,
                        name=f'Room {number}',
                        capacity=capacity,
                    ))
            Room.objects.bulk_create(rooms)
            floors_changed('seeded')
    except IntegrityError:
        # a concurrent seed won the race
        raise HostelAlreadySeeded()
    logger.info("Seeded hostel with %s floors and %s rooms", floor_count, len(rooms))
    log_action(user=user, action='hostel_seed', object_type='floor',
               detail={'floors': floor_count, 'rooms': len(rooms)})
    return len(rooms)


def list_floors() -> list[dict]:
    """All floors with their rooms and occupants, sorted by floor number."""
    key = floors_cache_key()
    cached = cache.get(key)
    if cached is not None:
        return cached
    occupants = defaultdict(list)
    for b in Booking.objects.order_by('created_at', 'id').values('room_id', 'user_id', 'full_name', 'student_id'):
        occupants[b['room_id']].append({
            'uid': b['user_id'],
            'name': b['full_name'],
            'studentId': b['student_id'],
        })
    floors: list[dict] = []
    for floor in Floor.objects.prefetch_related('rooms').order_by('floor_number'):
        rooms = []
        for room in floor.rooms.all():
            students = occupants.get(room.id, [])
            rooms.append({
                'id': room.id,
                'name': room.name,
                'capacity': room.capacity,
                'maintenance': room.maintenance,
                'students': students,
                'occupied': len(students),
                'status': room_status(room, len(students)),
            })
        floors.append({
            'id': floor.id,
            'floorNumber': floor.floor_number,
            'name': floor.name,
            'rooms': rooms,
        })
    cache.set(key, floors, settings.HOSTEL_CACHE_SECONDS)
    return floors


def occupancy_summary() -> dict:
    total_capacity = Room.objects.aggregate(total=Sum('capacity'))['total'] or 0
    total_occupied = Booking.objects.count()
    return {
        'totalCapacity': total_capacity,
        'totalOccupied': total_occupied,
        'available': max(total_capacity - total_occupied, 0),
        'needsSeeding': not Floor.objects.exists(),
    }


def set_maintenance(floor_id: str, room_id: str, flag: bool, user=None) -> Room:
    with transaction.atomic():
        room = get_room(floor_id, room_id, lock=True)
        room.maintenance = flag
        room.save(update_fields=['maintenance'])
        floors_changed('maintenance', room.id)
    logger.info("Room %s maintenance set to %s", room.id, flag)
    log_action(user=user, action='room_maintenance', object_type='room', object_id=room.id,
               detail={'maintenance': flag})
    return room
