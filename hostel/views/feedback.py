from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsAdminRole, IsStudentRole
from hostel.serializers.requests import FeedbackSerializer
from hostel.services.feedback import format_feedback, list_feedback, submit_feedback
from hostel.throttles import SubmitRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def submit_view(request):
    s = FeedbackSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    f = submit_feedback(request.user, rating=vd['rating'], category=vd['category'], comment=vd.get('comment', ''))
    return Response({'ok': True, 'data': format_feedback(f)}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def admin_list_view(request):
    items, average = list_feedback()
    return Response({'ok': True, 'data': [format_feedback(f) for f in items], 'averageRating': average})
