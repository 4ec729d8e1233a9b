"""
URL mappings for the hospital administration API.

Every API route lives under ``/api/`` without a trailing slash.  Fixed
segments (``search``, ``recent``, ``upcoming``, ``me``, ``login``) are
listed before the ``<int:pk>`` routes of the same prefix.
"""
from django.urls import include, path

from .auth_views import login_view, me
from .views import appointments, doctors, health, patients, stats, users

urlpatterns = [
    # /metrics
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    # Authentication and accounts
    path('api/users/login', login_view),
    path('api/users/me', me),
    path('api/users', users.user_collection),
    path('api/users/<int:pk>', users.user_detail),

    # Doctors
    path('api/doctors', doctors.doctor_collection),
    path('api/doctors/search', doctors.search_doctors),
    path('api/doctors/<int:pk>', doctors.doctor_detail),
    path('api/doctors/<int:pk>/slots', doctors.doctor_slots),

    # Patients
    path('api/patients', patients.patient_collection),
    path('api/patients/search', patients.search_patients),
    path('api/patients/<int:pk>', patients.patient_detail),

    # Appointments
    path('api/appointments', appointments.appointment_collection),
    path('api/appointments/recent', appointments.recent_appointments),
    path('api/appointments/upcoming', appointments.upcoming_appointments),
    path('api/appointments/doctor/<int:doctor_id>', appointments.doctor_appointments),
    path('api/appointments/patient/<int:patient_id>', appointments.patient_appointments),
    path('api/appointments/<int:pk>', appointments.appointment_detail),
    path('api/appointments/<int:pk>/status', appointments.appointment_status),

    # Dashboard
    path('api/stats', stats.stats),
]
