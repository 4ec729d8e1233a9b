from django.utils import timezone

from clinic.models import Appointment, Doctor, Patient


def dashboard_counts() -> dict:
    """Headline counts for the dashboard; "today" is the server's local date."""
    return {
        'doctors': Doctor.objects.count(),
        'patients': Patient.objects.count(),
        'appointments': Appointment.objects.count(),
        'todayAppointments': Appointment.objects.filter(date=timezone.localdate()).count(),
    }
