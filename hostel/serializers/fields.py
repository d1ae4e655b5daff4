import bleach
from rest_framework import serializers


def required_message(message: str) -> dict:
    """``error_messages`` that report a missing, null or blank value as ``message``."""
    return {'required': message, 'null': message, 'blank': message}


class CleanCharField(serializers.CharField):
    """CharField that strips any HTML from the submitted text."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=[], strip=True)


class RequiredChoiceField(serializers.ChoiceField):
    """ChoiceField that reports an empty selection as ``blank`` rather than an invalid choice."""

    def to_internal_value(self, data):
        if data == '' and not self.allow_blank:
            self.fail('blank')
        return super().to_internal_value(data)
