"""
Floor layout and occupancy endpoints, plus the admin-only seed and
maintenance switches.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole
from hostel.serializers.hostel import MaintenanceSerializer
from hostel.services.inventory import list_floors, occupancy_summary, seed_hostel, set_maintenance


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def seed_view(request):
    created = seed_hostel(user=request.user)
    return Response({'ok': True, 'data': {'roomsCreated': created}}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def floors_view(request):
    return Response({'ok': True, 'data': list_floors()})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def summary_view(request):
    return Response({'ok': True, 'data': occupancy_summary()})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def maintenance_view(request):
    s = MaintenanceSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    room = set_maintenance(vd['floorId'], vd['roomId'], vd['maintenance'], user=request.user)
    return Response({'ok': True, 'data': {'roomId': room.id, 'maintenance': room.maintenance}})
