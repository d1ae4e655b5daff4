"""
Late-entry and leave pass endpoints.  The two share one shape: a
student submits and lists their own, an admin lists by status tab and
approves or rejects.
"""
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.models import DecidedRequest
from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.requests import DecisionStatusQuerySerializer, LateEntrySerializer, LeaveSerializer
from hostel.services.passes import (
    decide_late_entry,
    decide_leave,
    format_late_entry,
    format_leave,
    list_late_entries,
    list_leaves,
    submit_late_entry,
    submit_leave,
)
from hostel.throttles import SubmitRateThrottle


def _status_filter(request):
    q = DecisionStatusQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return q.validated_data.get('status')


# ---------------------------------------------------------------------
# Late entry
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def late_entry_submit(request):
    s = LateEntrySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    req = submit_late_entry(
        request.user,
        departure_time=vd['departureTime'],
        expected_return_time=vd['expectedReturnTime'],
        reason=vd['reason'],
    )
    return Response({'ok': True, 'data': format_late_entry(req)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentRole])
def late_entry_mine(request):
    return Response({'ok': True, 'data': [format_late_entry(r) for r in list_late_entries(user=request.user)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def late_entry_admin_list(request):
    items = list_late_entries(status=_status_filter(request))
    return Response({'ok': True, 'data': [format_late_entry(r) for r in items]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def late_entry_approve(request, request_id: int):
    req = decide_late_entry(request_id, DecidedRequest.STATUS_APPROVED, request.user)
    return Response({'ok': True, 'data': format_late_entry(req)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def late_entry_reject(request, request_id: int):
    req = decide_late_entry(request_id, DecidedRequest.STATUS_REJECTED, request.user)
    return Response({'ok': True, 'data': format_late_entry(req)})


# ---------------------------------------------------------------------
# Leave
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def leave_submit(request):
    s = LeaveSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    req = submit_leave(
        request.user,
        departure_datetime=vd['departureDateTime'],
        return_datetime=vd['returnDateTime'],
        place_of_visit=vd['placeOfVisit'],
        reason=vd['reason'],
    )
    return Response({'ok': True, 'data': format_leave(req)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentRole])
def leave_mine(request):
    return Response({'ok': True, 'data': [format_leave(r) for r in list_leaves(user=request.user)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def leave_admin_list(request):
    items = list_leaves(status=_status_filter(request))
    return Response({'ok': True, 'data': [format_leave(r) for r in items]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def leave_approve(request, request_id: int):
    req = decide_leave(request_id, DecidedRequest.STATUS_APPROVED, request.user)
    return Response({'ok': True, 'data': format_leave(req)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def leave_reject(request, request_id: int):
    req = decide_leave(request_id, DecidedRequest.STATUS_REJECTED, request.user)
    return Response({'ok': True, 'data': format_leave(req)})
