"""
Payload schemas for the contacts public API

These only check shape and types. Normalization (trimming, lower-casing,
phone canonicalization, date parsing) happens afterwards in ContactPatch,
so the values here are still raw.
"""

from collections.abc import Mapping

from rest_framework import serializers

# Fits Contact.total_value (14 digits, 2 decimal places)
MAX_TOTAL_VALUE = 999_999_999_999.99


class StrictCharField(serializers.CharField):
    """CharField that refuses numbers and booleans instead of casting them"""

    default_error_messages = {
        'invalid': 'Not a valid string.',
    }

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('trim_whitespace', False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')
        return super().to_internal_value(data)


class StrictNumberField(serializers.FloatField):
    """FloatField that refuses numeric strings and booleans"""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('min_value', -MAX_TOTAL_VALUE)
        kwargs.setdefault('max_value', MAX_TOTAL_VALUE)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail('invalid')
        return super().to_internal_value(data)


class StrictSerializer(serializers.Serializer):
    """Rejects keys that are not declared fields"""

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            unknown = sorted(set(data) - set(self.fields))
            if unknown:
                raise serializers.ValidationError({
                    key: ['Unknown field.'] for key in unknown
                })
        return super().to_internal_value(data)


class ContactUpsertSerializer(StrictSerializer):
    name = StrictCharField(max_length=255)
    email = StrictCharField(max_length=320)
    phone = StrictCharField(max_length=32)
    role = StrictCharField(max_length=255)
    company_name = StrictCharField(max_length=255)
    client_company_id = serializers.UUIDField(required=False)
    avatar = StrictCharField()
    status = StrictCharField(max_length=50)
    stage = StrictCharField(max_length=50)
    birth_date = StrictCharField(max_length=64)          # YYYY-MM-DD
    last_interaction = StrictCharField(max_length=64)    # ISO timestamp
    last_purchase_date = StrictCharField(max_length=64)  # YYYY-MM-DD
    total_value = StrictNumberField()
    source = StrictCharField(max_length=100)
    notes = StrictCharField()


class ContactPatchSerializer(StrictSerializer):
    name = StrictCharField(max_length=255)
    email = StrictCharField(max_length=320, allow_null=True)
    phone = StrictCharField(max_length=32, allow_null=True)
    role = StrictCharField(max_length=255, allow_null=True)
    company_name = StrictCharField(max_length=255, allow_null=True)
    client_company_id = serializers.UUIDField(required=False, allow_null=True)
    avatar = StrictCharField(allow_null=True)
    status = StrictCharField(max_length=50, allow_null=True)
    stage = StrictCharField(max_length=50, allow_null=True)
    birth_date = StrictCharField(max_length=64, allow_null=True)
    last_interaction = StrictCharField(max_length=64, allow_null=True)
    last_purchase_date = StrictCharField(max_length=64, allow_null=True)
    total_value = StrictNumberField(allow_null=True)
    source = StrictCharField(max_length=100, allow_null=True)
    notes = StrictCharField(allow_null=True)


def describe_errors(errors):
    """
    Flatten serializer.errors into one line for the "error" field:
        {'email': ['Not a valid string.']} -> 'Invalid payload: email: Not a valid string.'
    """
    if isinstance(errors, Mapping):
        parts = []
        for key, messages in errors.items():
            if isinstance(messages, (list, tuple)):
                text = ' '.join(str(message) for message in messages)
            else:
                text = str(messages)
            parts.append(text if key == 'non_field_errors' else f"{key}: {text}")
        if parts:
            return 'Invalid payload: ' + '; '.join(parts)
    return 'Invalid payload'
