from rest_framework import serializers

from hostel.models import User
from hostel.serializers.fields import CleanCharField, required_message

FILL_ALL = 'Please fill in all fields.'


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(error_messages=required_message(FILL_ALL))
    password = serializers.CharField(trim_whitespace=False, error_messages=required_message(FILL_ALL))

    def validate_email(self, v):
        return v.strip().lower()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={**required_message(FILL_ALL), 'invalid': 'Enter a valid email address.'})
    password = serializers.CharField(min_length=6, trim_whitespace=False, error_messages={
        **required_message(FILL_ALL),
        'min_length': 'Password should be at least 6 characters.',
    })
    fullName = CleanCharField(max_length=150, error_messages=required_message('Full Name is required for sign up.'))

    def validate_email(self, v):
        v = v.strip().lower()
        if User.objects.filter(username__iexact=v).exists():
            raise serializers.ValidationError('An account with this email already exists.')
        return v


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
