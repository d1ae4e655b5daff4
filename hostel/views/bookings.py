from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from hostel.permissions import IsStudentRole
from hostel.serializers.hostel import BookRoomSerializer
from hostel.services.bookings import book_room, booking_summary
from hostel.throttles import SubmitRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudentRole])
@throttle_classes([SubmitRateThrottle])
def book_view(request):
    s = BookRoomSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    booking = book_room(
        request.user,
        floor_id=vd['floorId'],
        room_id=vd['roomId'],
        full_name=vd['fullName'],
        student_id=vd['studentId'],
    )
    return Response({'ok': True, 'data': booking.summary()}, status=201)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_booking_view(request):
    return Response({'ok': True, 'data': booking_summary(request.user)})
