from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.requests import ComplaintSerializer, ComplaintStatusQuerySerializer
from hostel.services.complaints import format_complaint, list_complaints, resolve_complaint, submit_complaint
from hostel.throttles import SubmitRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def submit_view(request):
    s = ComplaintSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    c = submit_complaint(
        request.user,
        category=vd['category'],
        description=vd['description'],
        floor_id=vd.get('floorId') or None,
        room_id=vd.get('roomId') or None,
    )
    return Response({'ok': True, 'data': format_complaint(c)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentRole])
def mine_view(request):
    return Response({'ok': True, 'data': [format_complaint(c) for c in list_complaints(user=request.user)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_list_view(request):
    q = ComplaintStatusQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = list_complaints(status=q.validated_data.get('status'))
    return Response({'ok': True, 'data': [format_complaint(c) for c in items]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def resolve_view(request, complaint_id: int):
    c = resolve_complaint(complaint_id, request.user)
    return Response({'ok': True, 'data': format_complaint(c)})
