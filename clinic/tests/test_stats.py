import datetime as dt

import pytest
from django.utils import timezone

from clinic.models import Appointment
from clinic.tests.conftest import make_doctor, make_patient

pytestmark = pytest.mark.django_db


def test_stats_counts(staff_client, doctor, patient):
    make_doctor(email='second@example.com', name='Second Doctor')
    today = timezone.localdate()
    Appointment.objects.create(doctor=doctor, patient=patient, date=today, time='08:00')
    Appointment.objects.create(doctor=doctor, patient=patient, date=today, time='09:00', status='cancelled')
    Appointment.objects.create(doctor=doctor, patient=patient, date=today + dt.timedelta(days=2), time='08:00')

    r = staff_client.get('/api/stats')
    assert r.status_code == 200
    assert r.data == {'doctors': 2, 'patients': 1, 'appointments': 3, 'todayAppointments': 2}


def test_stats_on_empty_store(staff_client):
    assert staff_client.get('/api/stats').data == {
        'doctors': 0, 'patients': 0, 'appointments': 0, 'todayAppointments': 0,
    }


def test_stats_requires_auth(anon_client):
    assert anon_client.get('/api/stats').status_code == 401
