from rest_framework import serializers

from clinic.models import Doctor
from clinic.validators import (
    DAYS,
    DOCTOR_PHONE_RE,
    minutes_of,
    normalize_time,
    regex_validator,
    strip_markup,
    validate_person_name,
)


class AvailableSlotSerializer(serializers.Serializer):
    day = serializers.ChoiceField(
        choices=DAYS,
        error_messages={'invalid_choice': 'Please provide a valid day of the week'},
    )
    startTime = serializers.CharField()
    endTime = serializers.CharField()

    def validate_startTime(self, v):
        return normalize_time(v, 'Start time must be in HH:MM format (24-hour)')

    def validate_endTime(self, v):
        return normalize_time(v, 'End time must be in HH:MM format (24-hour)')

    def validate(self, attrs):
        # nested fields skip required checks when the root is partial
        missing = {
            name: self.fields[name].error_messages['required']
            for name in ('day', 'startTime', 'endTime') if name not in attrs
        }
        if missing:
            raise serializers.ValidationError(missing)
        if minutes_of(attrs['endTime']) <= minutes_of(attrs['startTime']):
            raise serializers.ValidationError({'endTime': 'End time must be after start time'})
        return attrs


def validate_unique_days(slots):
    days = [slot['day'] for slot in slots]
    if len(set(days)) != len(days):
        raise serializers.ValidationError('Duplicate days are not allowed in available slots')
    return slots


class DoctorSerializer(serializers.ModelSerializer):
    """Validates doctor payloads and renders stored doctors.

    Used with ``partial=True`` for PATCH so that omitted fields keep
    their stored values.
    """
    name = serializers.CharField(min_length=2, max_length=100)
    specialty = serializers.ChoiceField(
        choices=Doctor.SPECIALTIES,
        error_messages={'invalid_choice': 'Please select a valid medical specialty'},
    )
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})
    phone = serializers.CharField(
        validators=[regex_validator(DOCTOR_PHONE_RE, 'Invalid phone number format')],
    )
    avatarUrl = serializers.URLField(
        source='avatar_url', required=False, allow_null=True, allow_blank=True,
        error_messages={'invalid': 'Invalid URL format'},
    )
    availableSlots = serializers.ListField(
        source='available_slots', child=AvailableSlotSerializer(), required=False,
        validators=[validate_unique_days],
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Doctor
        fields = [
            'id', 'name', 'specialty', 'email', 'phone', 'avatarUrl',
            'availableSlots', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id']

    def validate_name(self, v):
        return validate_person_name(strip_markup(v))

    def validate_email(self, v):
        return v.strip().lower()

    def validate_phone(self, v):
        return v.strip()

    def validate_avatarUrl(self, v):
        return v or None

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['availableSlots'] = instance.available_slots or []
        return data


class DoctorSlotsSerializer(serializers.Serializer):
    availableSlots = serializers.ListField(
        child=AvailableSlotSerializer(), allow_empty=True, validators=[validate_unique_days],
    )
