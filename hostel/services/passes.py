"""
Late-entry and leave passes.  Both are submitted by a student and then
approved or rejected by an admin.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction

from hostel.models import DecidedRequest, LateEntryRequest, LeaveRequest, User
from hostel.services import events
from hostel.services.decisions import decide

logger = logging.getLogger(__name__)


def _iso(value):
    return value.isoformat() if value else None


def _decision_fields(req: DecidedRequest) -> dict:
    return {
        'id': req.id,
        'userId': req.user_id,
        'userName': req.user_name,
        'status': req.status,
        'createdAt': _iso(req.created_at),
        'decidedAt': _iso(req.decided_at),
    }


def format_late_entry(req: LateEntryRequest) -> dict:
    data = _decision_fields(req)
    data.update({
        'departureTime': _iso(req.departure_time),
        'expectedReturnTime': _iso(req.expected_return_time),
        'reason': req.reason,
    })
    return data


def format_leave(req: LeaveRequest) -> dict:
    data = _decision_fields(req)
    data.update({
        'departureDateTime': _iso(req.departure_datetime),
        'returnDateTime': _iso(req.return_datetime),
        'placeOfVisit': req.place_of_visit,
        'reason': req.reason,
    })
    return data


def _list(model, user: Optional[User], status: Optional[str]):
    qs = model.objects.all()
    if user is not None:
        qs = qs.filter(user=user)
    if status:
        qs = qs.filter(status=status)
    return list(qs.order_by('-created_at', '-id'))


def submit_late_entry(user: User, *, departure_time, expected_return_time, reason: str) -> LateEntryRequest:
    with transaction.atomic():
        req = LateEntryRequest.objects.create(
            user=user,
            user_name=user.display_name,
            departure_time=departure_time,
            expected_return_time=expected_return_time,
            reason=reason,
        )
        events.publish(events.LATE_ENTRY_REQUESTS, 'created', req.pk, user_id=user.pk,
                       data=format_late_entry(req))
    logger.info("Late entry request %s submitted by %s", req.pk, user.pk)
    return req


def list_late_entries(*, user: Optional[User] = None, status: Optional[str] = None) -> list[LateEntryRequest]:
    return _list(LateEntryRequest, user, status)


def decide_late_entry(request_id, decision: str, admin: User) -> LateEntryRequest:
    return decide(LateEntryRequest, request_id, decision, admin,
                  collection=events.LATE_ENTRY_REQUESTS, formatter=format_late_entry)


def submit_leave(user: User, *, departure_datetime, return_datetime, place_of_visit: str, reason: str) -> LeaveRequest:
    with transaction.atomic():
        req = LeaveRequest.objects.create(
            user=user,
            user_name=user.display_name,
            departure_datetime=departure_datetime,
            return_datetime=return_datetime,
            place_of_visit=place_of_visit,
            reason=reason,
        )
        events.publish(events.LEAVE_REQUESTS, 'created', req.pk, user_id=user.pk, data=format_leave(req))
    logger.info("Leave request %s (%s) submitted by %s", req.pk, place_of_visit, user.pk)
    return req


def list_leaves(*, user: Optional[User] = None, status: Optional[str] = None) -> list[LeaveRequest]:
    return _list(LeaveRequest, user, status)


def decide_leave(request_id, decision: str, admin: User) -> LeaveRequest:
    return decide(LeaveRequest, request_id, decision, admin,
                  collection=events.LEAVE_REQUESTS, formatter=format_leave)
