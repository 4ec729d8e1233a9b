from rest_framework import serializers

from clinic.models import Appointment
from clinic.serializers.fields import LenientDateField
from clinic.validators import normalize_time, validate_not_past

STATUS_ERROR = {'invalid_choice': 'Please select a valid appointment status'}


class AppointmentInputSerializer(serializers.Serializer):
    """Format validation for booking and partial update payloads.

    Only shape/format rules live here; doctor/patient existence and the
    scheduling conflict are checked by the appointment service.
    """
    doctorId = serializers.IntegerField(min_value=1, error_messages={'invalid': 'Invalid doctor ID format'})
    patientId = serializers.IntegerField(min_value=1, error_messages={'invalid': 'Invalid patient ID format'})
    date = LenientDateField(validators=[validate_not_past])
    time = serializers.CharField()
    status = serializers.ChoiceField(
        choices=Appointment.STATUSES, default=Appointment.STATUS_SCHEDULED, error_messages=STATUS_ERROR,
    )
    notes = serializers.CharField(
        max_length=500, required=False, allow_null=True, allow_blank=True,
        error_messages={'max_length': 'Notes cannot exceed 500 characters'},
    )

    def validate_time(self, v):
        return normalize_time(v)


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Appointment.STATUSES,
        error_messages={**STATUS_ERROR, 'required': 'Status is required'},
    )


class AppointmentSerializer(serializers.ModelSerializer):
    doctorId = serializers.IntegerField(source='doctor_id', read_only=True)
    patientId = serializers.IntegerField(source='patient_id', read_only=True)
    doctor = serializers.SerializerMethodField()
    patient = serializers.SerializerMethodField()
    datetime = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'doctorId', 'patientId', 'doctor', 'patient', 'date', 'time',
            'datetime', 'status', 'notes', 'createdAt', 'updatedAt',
        ]
        read_only_fields = ['date', 'time', 'status', 'notes']

    def get_doctor(self, obj):
        d = obj.doctor
        return {'id': d.id, 'name': d.name, 'specialty': d.specialty}

    def get_patient(self, obj):
        p = obj.patient
        return {'id': p.id, 'name': p.name, 'email': p.email}

    def get_datetime(self, obj):
        return obj.datetime.isoformat(timespec='minutes')


def recent_item(obj: Appointment) -> dict:
    """Compact row used by the dashboard's recent appointments widget."""
    return {
        'id': obj.id,
        'doctor': {'name': obj.doctor.name, 'specialty': obj.doctor.specialty} if obj.doctor_id else None,
        'patient': {'name': obj.patient.name} if obj.patient_id else None,
        'date': obj.date.isoformat(),
        'time': obj.time,
        'status': obj.status,
    }


class RecentQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, min_value=0, max_value=3650, default=30)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=10)
    status = serializers.ChoiceField(choices=Appointment.STATUSES, required=False, error_messages=STATUS_ERROR)
    doctorId = serializers.IntegerField(required=False, min_value=1)
    patientId = serializers.IntegerField(required=False, min_value=1)
    upcoming = serializers.BooleanField(required=False, default=False)


class AppointmentListQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])


class UpcomingQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500, default=10)
