"""Input validation for everything a student submits and the admin filters."""
from rest_framework import serializers

from hostel.models import Complaint, DecidedRequest, Feedback, LaundryRequest
from hostel.serializers.fields import CleanCharField, RequiredChoiceField, required_message

FILL_ALL = 'Please fill in all fields.'
FILL_REQUIRED = 'Please fill in all required fields.'


class RoomChangeSerializer(serializers.Serializer):
    reason = CleanCharField(max_length=2000, error_messages=required_message(
        'Please provide a reason for your room change request.'))
    preferredFloorId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    preferredRoomId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class ComplaintSerializer(serializers.Serializer):
    category = RequiredChoiceField(choices=Complaint.CATEGORY_CHOICES,
                                   error_messages=required_message(FILL_REQUIRED))
    description = CleanCharField(max_length=4000, error_messages=required_message(FILL_REQUIRED))
    floorId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    roomId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)


class FeedbackSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, error_messages={
        **required_message('Please provide a star rating.'),
        'min_value': 'Please provide a star rating.',
        'max_value': 'Rating must be between 1 and 5.',
    })
    category = RequiredChoiceField(choices=Feedback.CATEGORY_CHOICES,
                                   error_messages=required_message('Please select a category.'))
    comment = CleanCharField(max_length=4000, required=False, allow_blank=True, default='')


class LaundrySerializer(serializers.Serializer):
    floorId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    roomId = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    numberOfClothes = serializers.IntegerField(min_value=1, error_messages={
        **required_message(FILL_ALL),
        'min_value': 'Number of clothes must be at least 1.',
    })
    laundryNumber = CleanCharField(max_length=50, error_messages=required_message(FILL_ALL))
    bagNumber = CleanCharField(max_length=50, error_messages=required_message(FILL_ALL))


class LaundryStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[LaundryRequest.STATUS_PROCESSING, LaundryRequest.STATUS_COMPLETED])


class LateEntrySerializer(serializers.Serializer):
    departureTime = serializers.DateTimeField(error_messages=required_message(FILL_ALL))
    expectedReturnTime = serializers.DateTimeField(error_messages=required_message(FILL_ALL))
    reason = CleanCharField(max_length=2000, error_messages=required_message(FILL_ALL))

    def validate(self, attrs):
        if attrs['expectedReturnTime'] <= attrs['departureTime']:
            raise serializers.ValidationError('Return time must be after departure time.')
        return attrs


class LeaveSerializer(serializers.Serializer):
    departureDateTime = serializers.DateTimeField(error_messages=required_message(FILL_ALL))
    returnDateTime = serializers.DateTimeField(error_messages=required_message(FILL_ALL))
    placeOfVisit = CleanCharField(max_length=255, error_messages=required_message(FILL_ALL))
    reason = CleanCharField(max_length=2000, error_messages=required_message(FILL_ALL))

    def validate(self, attrs):
        if attrs['returnDateTime'] <= attrs['departureDateTime']:
            raise serializers.ValidationError('Return date and time must be after departure.')
        return attrs


class DecisionStatusQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s for s, _ in DecidedRequest.STATUS_CHOICES], required=False)


class ComplaintStatusQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s for s, _ in Complaint.STATUS_CHOICES], required=False)


class LaundryStatusQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s for s, _ in LaundryRequest.STATUS_CHOICES], required=False)
