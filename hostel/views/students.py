from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.details import StudentDetailsSerializer
from hostel.services.students import format_details, get_details, list_student_records, save_details


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsStudentRole])
def personal_details_view(request):
    if request.method == 'GET':
        return Response({'ok': True, 'data': get_details(request.user)})
    s = StudentDetailsSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    details = save_details(request.user, s.validated_data)
    return Response({'ok': True, 'data': format_details(details)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def student_records_view(request):
    """Every student's personal details joined with their current room."""
    return Response({'ok': True, 'data': list_student_records()})
