from rest_framework import serializers

from hostel.serializers.fields import CleanCharField, required_message


class StudentDetailsSerializer(serializers.Serializer):
    """All fields optional so a PUT merges into what is stored."""
    fullName = CleanCharField(max_length=120, required=False,
                              error_messages=required_message('Full Name is required.'))
    phoneNumber = CleanCharField(max_length=32, required=False, allow_blank=True)
    homeAddress = CleanCharField(max_length=1000, required=False, allow_blank=True)
    fatherName = CleanCharField(max_length=120, required=False, allow_blank=True)
    fatherMobile = CleanCharField(max_length=32, required=False, allow_blank=True)
    motherName = CleanCharField(max_length=120, required=False, allow_blank=True)
    motherMobile = CleanCharField(max_length=32, required=False, allow_blank=True)
