from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.requests import LaundrySerializer, LaundryStatusQuerySerializer, LaundryStatusSerializer
from hostel.services.laundry import format_laundry, list_laundry, submit_laundry, update_laundry_status
from hostel.throttles import SubmitRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def submit_view(request):
    s = LaundrySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    req = submit_laundry(
        request.user,
        floor_id=vd.get('floorId') or None,
        room_id=vd.get('roomId') or None,
        number_of_clothes=vd['numberOfClothes'],
        laundry_number=vd['laundryNumber'],
        bag_number=vd['bagNumber'],
    )
    return Response({'ok': True, 'data': format_laundry(req)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStudentRole])
def mine_view(request):
    return Response({'ok': True, 'data': [format_laundry(r) for r in list_laundry(user=request.user)]})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_list_view(request):
    q = LaundryStatusQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = list_laundry(status=q.validated_data.get('status'))
    return Response({'ok': True, 'data': [format_laundry(r) for r in items]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def status_view(request, request_id: int):
    s = LaundryStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    req = update_laundry_status(request_id, s.validated_data['status'], request.user)
    return Response({'ok': True, 'data': format_laundry(req)})
