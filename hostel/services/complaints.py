from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from hostel.exceptions import HostelConflict
from hostel.models import Complaint, User
from hostel.services import events
from hostel.services.audit import log_action
from hostel.services.inventory import get_room, room_ref

logger = logging.getLogger(__name__)


def format_complaint(c: Complaint) -> dict:
    return {
        'id': c.id,
        'userId': c.user_id,
        'userName': c.user_name,
        'category': c.category,
        'description': c.description,
        'location': room_ref(c.location),
        'status': c.status,
        'createdAt': c.created_at.isoformat() if c.created_at else None,
        'resolvedAt': c.resolved_at.isoformat() if c.resolved_at else None,
    }


def submit_complaint(user: User, *, category: str, description: str,
                     floor_id: Optional[str] = None, room_id: Optional[str] = None) -> Complaint:
    if room_id and not floor_id:
        raise ValidationError({'floorId': 'Select the floor of the room.'})
    location = get_room(floor_id, room_id) if room_id else None
    with transaction.atomic():
        c = Complaint.objects.create(
            user=user,
            user_name=user.display_name,
            category=category,
            description=description,
            location=location,
        )
        events.publish(events.COMPLAINTS, 'created', c.pk, user_id=user.pk, data=format_complaint(c))
    logger.info("Complaint %s (%s) filed by %s", c.pk, category, user.pk)
    return c


def list_complaints(*, user: Optional[User] = None, status: Optional[str] = None) -> list[Complaint]:
    qs = Complaint.objects.select_related('location__floor')
    if user is not None:
        qs = qs.filter(user=user)
    if status:
        qs = qs.filter(status=status)
    return list(qs.order_by('-created_at', '-id'))


def resolve_complaint(complaint_id, admin: User) -> Complaint:
    with transaction.atomic():
        c = Complaint.objects.select_for_update().filter(pk=complaint_id).first()
        if c is None:
            raise NotFound('Complaint not found.')
        if c.status == Complaint.STATUS_RESOLVED:
            logger.warning("Complaint %s is already resolved", c.pk)
            raise HostelConflict('This complaint has already been resolved.')
        c.status = Complaint.STATUS_RESOLVED
        c.resolved_at = timezone.now()
        c.save(update_fields=['status', 'resolved_at'])
        c = Complaint.objects.select_related('location__floor').get(pk=c.pk)
        events.publish(events.COMPLAINTS, 'resolved', c.pk, user_id=c.user_id, data=format_complaint(c))
    logger.info("Complaint %s resolved by %s", c.pk, admin.pk)
    log_action(user=admin, action='complaint_resolved', object_type='complaint', object_id=c.pk)
    return c
