"""
Landing dashboards.  Students see their booking; the admin sees pending
work across every request type and the overall occupancy.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole
from hostel.services.dashboard import admin_dashboard, student_dashboard


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_view(request):
    return Response({'ok': True, 'data': student_dashboard(request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_dashboard_view(request):
    return Response({'ok': True, 'data': admin_dashboard()})
