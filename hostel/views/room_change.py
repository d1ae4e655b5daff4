from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.models import RoomChangeRequest
from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.requests import DecisionStatusQuerySerializer, RoomChangeSerializer
from hostel.services.room_change import (
    approve_room_change,
    format_room_change,
    list_my_room_changes,
    list_room_changes,
    reject_room_change,
    submit_room_change,
)
from hostel.throttles import SubmitRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def submit_view(request):
    s = RoomChangeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    req = submit_room_change(
        request.user,
        reason=vd['reason'],
        preferred_floor_id=vd.get('preferredFloorId') or None,
        preferred_room_id=vd.get('preferredRoomId') or None,
    )
    return Response({'ok': True, 'data': format_room_change(req)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentRole])
def mine_view(request):
    return Response({'ok': True, 'data': [format_room_change(r) for r in list_my_room_changes(request.user)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_list_view(request):
    """Pending requests by default; ``?status=`` picks another tab."""
    q = DecisionStatusQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    status = q.validated_data.get('status', RoomChangeRequest.STATUS_PENDING)
    return Response({'ok': True, 'data': [format_room_change(r) for r in list_room_changes(status)]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def approve_view(request, request_id: int):
    req = approve_room_change(request_id, request.user)
    return Response({'ok': True, 'data': format_room_change(req)})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def reject_view(request, request_id: int):
    req = reject_room_change(request_id, request.user)
    return Response({'ok': True, 'data': format_room_change(req)})
