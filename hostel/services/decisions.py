"""
Shared approve/reject flow for requests that an admin decides on.
"""
from __future__ import annotations

import logging
from typing import Callable, Type

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from hostel.exceptions import RequestAlreadyProcessed
from hostel.models import DecidedRequest, User
from hostel.services import events
from hostel.services.audit import log_action

logger = logging.getLogger(__name__)


def lock_pending(model: Type[DecidedRequest], pk) -> DecidedRequest:
    """Row-lock request ``pk`` and make sure it is still pending.  Call inside a transaction."""
    obj = model.objects.select_for_update().filter(pk=pk).first()
    if obj is None:
        raise NotFound(f'{model._meta.verbose_name.capitalize()} not found.')
    if obj.status != DecidedRequest.STATUS_PENDING:
        logger.warning("%s %s already %s", model.__name__, pk, obj.status)
        raise RequestAlreadyProcessed(f'This request has already been {obj.status.lower()}.')
    return obj


def mark_decided(obj: DecidedRequest, decision: str, admin: User) -> None:
    obj.status = decision
    obj.decided_at = timezone.now()
    obj.decided_by = admin
    obj.save(update_fields=['status', 'decided_at', 'decided_by'])


def decide(model: Type[DecidedRequest], pk, decision: str, admin: User, *,
           collection: str, formatter: Callable[[DecidedRequest], dict]) -> DecidedRequest:
    if decision not in (DecidedRequest.STATUS_APPROVED, DecidedRequest.STATUS_REJECTED):
        raise ValueError(f'invalid decision: {decision}')
    with transaction.atomic():
        obj = lock_pending(model, pk)
        mark_decided(obj, decision, admin)
        events.publish(collection, decision.lower(), obj.pk, user_id=obj.user_id, data=formatter(obj))
    logger.info("%s %s %s by %s", model.__name__, obj.pk, decision.lower(), admin.pk)
    log_action(user=admin, action=f'{model._meta.model_name}_{decision.lower()}',
               object_type=model._meta.model_name, object_id=obj.pk)
    return obj
