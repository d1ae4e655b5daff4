from __future__ import annotations

from hostel.models import (
    Complaint, DecidedRequest, Feedback, LaundryRequest, LateEntryRequest, LeaveRequest,
    RoomChangeRequest, User,
)
from hostel.services.bookings import booking_summary
from hostel.services.inventory import occupancy_summary


def student_dashboard(user: User) -> dict:
    return {
        'displayName': user.display_name,
        'needsSeeding': occupancy_summary()['needsSeeding'],
        'booking': booking_summary(user),
    }


def admin_dashboard() -> dict:
    pending = DecidedRequest.STATUS_PENDING
    return {
        'pendingRoomChanges': RoomChangeRequest.objects.filter(status=pending).count(),
        'pendingLateEntries': LateEntryRequest.objects.filter(status=pending).count(),
        'pendingLeaves': LeaveRequest.objects.filter(status=pending).count(),
        'pendingLaundry': LaundryRequest.objects.filter(status=LaundryRequest.STATUS_PENDING).count(),
        'pendingComplaints': Complaint.objects.filter(status=Complaint.STATUS_PENDING).count(),
        'feedbackTotal': Feedback.objects.count(),
        'occupancy': occupancy_summary(),
    }
