from rest_framework import serializers

from hostel.serializers.fields import CleanCharField, required_message

FILL_ALL = 'Please fill in all fields.'


class BookRoomSerializer(serializers.Serializer):
    floorId = serializers.CharField(max_length=20, error_messages=required_message('Please select a room.'))
    roomId = serializers.CharField(max_length=20, error_messages=required_message('Please select a room.'))
    fullName = CleanCharField(max_length=120, error_messages=required_message(FILL_ALL))
    studentId = CleanCharField(max_length=50, error_messages=required_message(FILL_ALL))


class MaintenanceSerializer(serializers.Serializer):
    floorId = serializers.CharField(max_length=20)
    roomId = serializers.CharField(max_length=20)
    maintenance = serializers.BooleanField()
