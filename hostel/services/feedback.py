from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Avg

from hostel.models import Feedback, User
from hostel.services import events

logger = logging.getLogger(__name__)


def format_feedback(f: Feedback) -> dict:
    return {
        'id': f.id,
        'userId': f.user_id,
        'userName': f.user_name,
        'rating': f.rating,
        'category': f.category,
        'comment': f.comment,
        'createdAt': f.created_at.isoformat() if f.created_at else None,
    }


def submit_feedback(user: User, *, rating: int, category: str, comment: str = '') -> Feedback:
    with transaction.atomic():
        f = Feedback.objects.create(
            user=user,
            user_name=user.display_name,
            rating=rating,
            category=category,
            comment=comment or '',
        )
        events.publish(events.FEEDBACK, 'created', f.pk, user_id=user.pk, data=format_feedback(f))
    logger.info("Feedback %s (%s stars) from %s", f.pk, rating, user.pk)
    return f


def list_feedback() -> tuple[list[Feedback], float | None]:
    """All feedback newest first, with the mean rating rounded to one decimal."""
    qs = Feedback.objects.order_by('-created_at', '-id')
    avg = qs.aggregate(avg=Avg('rating'))['avg']
    return list(qs), (round(avg, 1) if avg is not None else None)
