from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from rest_framework.exceptions import NotFound, ValidationError

from hostel.exceptions import HostelConflict
from hostel.models import Booking, LaundryRequest, User
from hostel.services import events
from hostel.services.audit import log_action
from hostel.services.inventory import get_room, room_ref

logger = logging.getLogger(__name__)

# allowed status moves
TRANSITIONS = {
    LaundryRequest.STATUS_PENDING: {LaundryRequest.STATUS_PROCESSING, LaundryRequest.STATUS_COMPLETED},
    LaundryRequest.STATUS_PROCESSING: {LaundryRequest.STATUS_COMPLETED},
    LaundryRequest.STATUS_COMPLETED: set(),
}


def format_laundry(req: LaundryRequest) -> dict:
    return {
        'id': req.id,
        'userId': req.user_id,
        'userName': req.user_name,
        'room': room_ref(req.room),
        'numberOfClothes': req.number_of_clothes,
        'laundryNumber': req.laundry_number,
        'bagNumber': req.bag_number,
        'status': req.status,
        'createdAt': req.created_at.isoformat() if req.created_at else None,
        'updatedAt': req.updated_at.isoformat() if req.updated_at else None,
    }


def submit_laundry(user: User, *, number_of_clothes: int, laundry_number: str, bag_number: str,
                   floor_id: Optional[str] = None, room_id: Optional[str] = None) -> LaundryRequest:
    """File a laundry request.  The location defaults to the student's booked room."""
    if not (floor_id and room_id):
        booking = Booking.objects.filter(user=user).select_related('room').first()
        if booking is not None:
            floor_id, room_id = booking.room.floor_id, booking.room_id
    if not (floor_id and room_id):
        raise ValidationError('Please fill in all fields.')
    room = get_room(floor_id, room_id, message='Selected room or floor not found.')
    with transaction.atomic():
        req = LaundryRequest.objects.create(
            user=user,
            user_name=user.display_name,
            room=room,
            number_of_clothes=number_of_clothes,
            laundry_number=laundry_number,
            bag_number=bag_number,
        )
        events.publish(events.LAUNDRY_REQUESTS, 'created', req.pk, user_id=user.pk, data=format_laundry(req))
    logger.info("Laundry request %s: %s clothes in bag %s from %s", req.pk, number_of_clothes, bag_number, user.pk)
    return req


def list_laundry(*, user: Optional[User] = None, status: Optional[str] = None) -> list[LaundryRequest]:
    qs = LaundryRequest.objects.select_related('room__floor')
    if user is not None:
        qs = qs.filter(user=user)
    if status:
        qs = qs.filter(status=status)
    return list(qs.order_by('-created_at', '-id'))


def update_laundry_status(request_id, new_status: str, admin: User) -> LaundryRequest:
    with transaction.atomic():
        req = LaundryRequest.objects.select_for_update().filter(pk=request_id).first()
        if req is None:
            raise NotFound('Laundry request not found.')
        if new_status not in TRANSITIONS.get(req.status, set()):
            logger.warning("Laundry %s: refused %s -> %s", req.pk, req.status, new_status)
            raise HostelConflict(f'Cannot move a {req.status.lower()} request to {new_status.lower()}.')
        old = req.status
        req.status = new_status
        req.save(update_fields=['status', 'updated_at'])
        req = LaundryRequest.objects.select_related('room__floor').get(pk=req.pk)
        events.publish(events.LAUNDRY_REQUESTS, 'updated', req.pk, user_id=req.user_id, data=format_laundry(req))
    logger.info("Laundry %s: %s -> %s by %s", req.pk, old, new_status, admin.pk)
    log_action(user=admin, action='laundry_status', object_type='laundryrequest', object_id=req.pk,
               detail={'from': old, 'to': new_status})
    return req
