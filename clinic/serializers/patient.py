from rest_framework import serializers

from clinic.models import Patient
from clinic.serializers.fields import LenientDateField
from clinic.validators import (
    BLOOD_TYPE_RE,
    PATIENT_PHONE_RE,
    strip_markup,
    validate_not_future,
    validate_person_name,
)

INVALID_PHONE = 'Please enter a valid phone number'


def _text_list(min_length, max_length, label, **kwargs):
    return serializers.ListField(
        child=serializers.CharField(
            min_length=min_length,
            max_length=max_length,
            error_messages={
                'min_length': f'{label} must be at least {min_length} characters long',
                'max_length': f'{label} cannot exceed {max_length} characters',
            },
        ),
        required=False,
        **kwargs,
    )


class PatientSerializer(serializers.ModelSerializer):
    """Validates patient payloads and renders stored patients."""
    name = serializers.CharField(
        min_length=2, max_length=100,
        error_messages={
            'min_length': 'Name must be at least 2 characters long',
            'max_length': 'Name cannot exceed 100 characters',
        },
    )
    birthdate = LenientDateField(
        validators=[validate_not_future],
        error_messages={'required': 'Please select a date'},
    )
    gender = serializers.ChoiceField(
        choices=[c for c, _ in Patient.GENDER_CHOICES],
        error_messages={'invalid_choice': 'Gender must be one of: male, female, other'},
    )
    status = serializers.ChoiceField(
        choices=[c for c, _ in Patient.STATUS_CHOICES], required=False,
        error_messages={'invalid_choice': 'Status must be one of: admitted, discharged, outpatient'},
    )
    email = serializers.EmailField(
        max_length=100,
        error_messages={'invalid': 'Please enter a valid email address'},
    )
    phone = serializers.CharField(max_length=20)
    address = serializers.CharField(min_length=5, max_length=200, required=False, allow_null=True)
    emergencyName = serializers.CharField(source='emergency_name', max_length=100, required=False, allow_null=True)
    emergencyPhone = serializers.CharField(source='emergency_phone', max_length=20, required=False, allow_null=True)
    bloodType = serializers.CharField(source='blood_type', required=False, allow_null=True)
    allergies = _text_list(2, 100, 'Allergy description')
    medicalHistory = _text_list(3, 200, 'Medical history entry', source='medical_history')
    treatments = _text_list(3, 200, 'Treatment description')
    medicalNotes = serializers.CharField(
        source='medical_notes', max_length=1000, required=False, allow_null=True, allow_blank=True,
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id', 'name', 'birthdate', 'gender', 'status', 'email', 'phone',
            'address', 'emergencyName', 'emergencyPhone', 'bloodType',
            'allergies', 'medicalHistory', 'treatments', 'medicalNotes',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id']

    def validate_name(self, v):
        return validate_person_name(strip_markup(v))

    def validate_email(self, v):
        return v.strip().lower()

    def validate_phone(self, v):
        v = v.strip()
        if not PATIENT_PHONE_RE.match(v):
            raise serializers.ValidationError(INVALID_PHONE)
        return v

    def validate_emergencyName(self, v):
        return validate_person_name(v) if v else v

    def validate_emergencyPhone(self, v):
        if v and not PATIENT_PHONE_RE.match(v.strip()):
            raise serializers.ValidationError(INVALID_PHONE)
        return v.strip() if v else v

    def validate_bloodType(self, v):
        if not v:
            return None
        v = v.strip().upper()
        if not BLOOD_TYPE_RE.match(v):
            raise serializers.ValidationError('Blood type must be one of: A+, A-, B+, B-, AB+, AB-, O+, O-')
        return v

    def validate_medicalNotes(self, v):
        return strip_markup(v.strip()) if v else v
