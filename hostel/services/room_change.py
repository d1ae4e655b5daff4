"""
Room change requests and the approval transaction.

Approval is the one operation here with a real concurrency contract:
the request, both rooms and the student's booking are row-locked in a
single transaction, capacity is re-checked under the lock, and the
booking is moved.  Any failure rolls everything back and leaves the
request pending.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from rest_framework.exceptions import APIException, NotFound, ValidationError

from hostel.exceptions import HostelConflict, NotBooked, RoomUnavailable
from hostel.models import Booking, DecidedRequest, Room, RoomChangeRequest, User
from hostel.services import events
from hostel.services.audit import log_action
from hostel.services.decisions import decide, lock_pending, mark_decided
from hostel.services.inventory import ensure_seeded, floors_changed, get_room, occupancy, room_ref

logger = logging.getLogger(__name__)


def format_room_change(req: RoomChangeRequest) -> dict:
    return {
        'id': req.id,
        'userId': req.user_id,
        'userName': req.user_name,
        'currentRoom': room_ref(req.current_room),
        'preferredRoom': room_ref(req.preferred_room),
        'reason': req.reason,
        'status': req.status,
        'createdAt': req.created_at.isoformat() if req.created_at else None,
        'decidedAt': req.decided_at.isoformat() if req.decided_at else None,
    }


def _with_rooms(qs):
    return qs.select_related('current_room__floor', 'preferred_room__floor')


def submit_room_change(user: User, *, reason: str, preferred_floor_id: Optional[str] = None,
                       preferred_room_id: Optional[str] = None) -> RoomChangeRequest:
    ensure_seeded()
    booking = Booking.objects.select_related('room__floor').filter(user=user).first()
    if booking is None:
        raise NotBooked("You don't have a room booked. Please book a room before requesting a change.")
    preferred = None
    if preferred_room_id:
        if not preferred_floor_id:
            raise ValidationError({'preferredFloorId': 'Select the floor of the preferred room.'})
        preferred = get_room(preferred_floor_id, preferred_room_id)
        if preferred.id == booking.room_id:
            raise ValidationError({'preferredRoomId': 'You already live in this room.'})
        if preferred.maintenance:
            raise RoomUnavailable('The selected room is under maintenance. Please choose another.')
        if occupancy(preferred) >= preferred.capacity:
            raise RoomUnavailable('The selected room is already full. Please choose another.')
    with transaction.atomic():
        req = RoomChangeRequest.objects.create(
            user=user,
            user_name=user.display_name,
            current_room=booking.room,
            preferred_room=preferred,
            reason=reason,
        )
        events.publish(events.ROOM_CHANGE_REQUESTS, 'created', req.pk, user_id=user.pk,
                       data=format_room_change(req))
    logger.info("Room change request %s submitted by %s", req.pk, user.pk)
    return req


def list_my_room_changes(user: User) -> list[RoomChangeRequest]:
    return list(_with_rooms(RoomChangeRequest.objects.filter(user=user)).order_by('-created_at', '-id'))


def list_room_changes(status: Optional[str] = DecidedRequest.STATUS_PENDING) -> list[RoomChangeRequest]:
    qs = _with_rooms(RoomChangeRequest.objects.all())
    if status:
        qs = qs.filter(status=status)
    return list(qs.order_by('-created_at', '-id'))


def approve_room_change(request_id, admin: User) -> RoomChangeRequest:
    """Move the student into the preferred room and mark the request approved."""
    try:
        with transaction.atomic():
            req = lock_pending(RoomChangeRequest, request_id)
            if req.preferred_room_id is None:
                raise ValidationError('This request has no preferred room to move the student into.')

            # lock in primary-key order so concurrent approvals cannot deadlock
            room_ids = sorted({req.current_room_id, req.preferred_room_id})
            rooms = {r.id: r for r in Room.objects.select_for_update().filter(id__in=room_ids).order_by('id')}
            new_room = rooms.get(req.preferred_room_id)
            if req.current_room_id not in rooms:
                raise NotFound('One or both floors involved in the change do not exist.')
            if new_room is None:
                raise NotFound('Preferred room not found.')

            booking = Booking.objects.select_for_update().filter(user_id=req.user_id).first()
            if booking is None or booking.room_id != req.current_room_id:
                raise HostelConflict('Student not found in their current room.')
            if new_room.maintenance:
                raise RoomUnavailable('The preferred room is under maintenance.')
            if occupancy(new_room) >= new_room.capacity:
                raise RoomUnavailable('The preferred room is now full.')

            booking.room = new_room
            booking.save(update_fields=['room', 'updated_at'])
            mark_decided(req, RoomChangeRequest.STATUS_APPROVED, admin)

            req = _with_rooms(RoomChangeRequest.objects.filter(pk=req.pk)).get()
            booking = Booking.objects.select_related('room__floor').get(pk=booking.pk)
            events.publish(events.ROOM_CHANGE_REQUESTS, 'approved', req.pk, user_id=req.user_id,
                           data=format_room_change(req))
            events.publish(events.BOOKINGS, 'updated', booking.pk, user_id=req.user_id,
                           data=booking.summary())
            floors_changed('room_change', new_room.id)
    except APIException as exc:
        logger.warning("Room change %s not approved: %s", request_id, exc.detail)
        raise
    logger.info("Room change %s approved: user %s moved %s -> %s",
                req.pk, req.user_id, req.current_room_id, req.preferred_room_id)
    log_action(user=admin, action='roomchangerequest_approved', object_type='roomchangerequest',
               object_id=req.pk, detail={'from': req.current_room_id, 'to': req.preferred_room_id})
    return req


def reject_room_change(request_id, admin: User) -> RoomChangeRequest:
    req = decide(RoomChangeRequest, request_id, RoomChangeRequest.STATUS_REJECTED, admin,
                 collection=events.ROOM_CHANGE_REQUESTS,
                 formatter=lambda r: format_room_change(_with_rooms(RoomChangeRequest.objects.filter(pk=r.pk)).get()))
    return _with_rooms(RoomChangeRequest.objects.filter(pk=req.pk)).get()
