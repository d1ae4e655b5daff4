"""
Change notifications for subscribed WebSocket clients.

Every committed write to a collection is pushed through the channel
layer.  Admins listen on ``admin.<collection>``, a student listens on
``user.<id>.<collection>`` and the floor layout is broadcast to
everyone on ``public.floors``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

logger = logging.getLogger(__name__)

FLOORS = 'floors'
BOOKINGS = 'bookings'
ROOM_CHANGE_REQUESTS = 'roomChangeRequests'
COMPLAINTS = 'complaints'
FEEDBACK = 'feedback'
LAUNDRY_REQUESTS = 'laundryRequests'
LATE_ENTRY_REQUESTS = 'lateEntryRequests'
LEAVE_REQUESTS = 'leaveRequests'
STUDENT_DETAILS = 'studentDetails'

COLLECTIONS = frozenset({
    FLOORS, BOOKINGS, ROOM_CHANGE_REQUESTS, COMPLAINTS, FEEDBACK,
    LAUNDRY_REQUESTS, LATE_ENTRY_REQUESTS, LEAVE_REQUESTS, STUDENT_DETAILS,
})
PUBLIC_COLLECTIONS = frozenset({FLOORS})


def admin_group(collection: str) -> str:
    return f"admin.{collection}"


def user_group(user_id: Any, collection: str) -> str:
    return f"user.{user_id}.{collection}"


def public_group(collection: str) -> str:
    return f"public.{collection}"


def target_groups(collection: str, user_id: Optional[Any] = None) -> list[str]:
    """Groups an event about ``collection`` owned by ``user_id`` is sent to."""
    if collection in PUBLIC_COLLECTIONS:
        return [public_group(collection)]
    groups = [admin_group(collection)]
    if user_id is not None:
        groups.append(user_group(user_id, collection))
    return groups


def subscription_groups(user, collection: str) -> list[str]:
    """Groups a connected ``user`` joins when subscribing to ``collection``."""
    if collection in PUBLIC_COLLECTIONS:
        return [public_group(collection)]
    if getattr(user, 'role', None) == 'admin':
        return [admin_group(collection)]
    return [user_group(user.pk, collection)]


def _send(groups: list[str], event: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    for group in groups:
        try:
            async_to_sync(channel_layer.group_send)(group, event)
        except Exception:
            logger.warning("Could not publish %s event to %s", event['collection'], group, exc_info=True)


def publish(collection: str, action: str, object_id: Any = None, *, user_id: Any = None, data: Optional[dict] = None) -> None:
    """Queue a change event; it is only sent if the current transaction commits."""
    if collection not in COLLECTIONS:
        raise ValueError(f"unknown collection: {collection}")
    event = {
        'type': 'collection.change',
        'collection': collection,
        'action': action,
        'id': object_id,
        'userId': user_id,
        'data': data or {},
    }
    groups = target_groups(collection, user_id)
    transaction.on_commit(lambda: _send(groups, event))
