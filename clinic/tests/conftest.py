import datetime as dt

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from clinic.models import Appointment, Doctor, Patient, User
from clinic.services.users import issue_token


def bearer(client: APIClient, user: User) -> APIClient:
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
    return client


def make_doctor(**overrides) -> Doctor:
    data = {
        'name': 'Gregory House',
        'specialty': 'Cardiology',
        'email': 'house@example.com',
        'phone': '+15551234567',
    }
    data.update(overrides)
    return Doctor.objects.create(**data)


def make_patient(**overrides) -> Patient:
    data = {
        'name': 'Jane Roe',
        'birthdate': dt.date(1990, 1, 1),
        'gender': 'female',
        'email': 'jane@example.com',
        'phone': '555-123-4567',
    }
    data.update(overrides)
    return Patient.objects.create(**data)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(email='admin@example.com', password='adminpass', name='Admin', role='admin')


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(email='staff@example.com', password='staffpass', name='Front Desk', role='staff')


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    return bearer(APIClient(), admin_user)


@pytest.fixture
def staff_client(staff_user):
    return bearer(APIClient(), staff_user)


@pytest.fixture
def doctor(db):
    return make_doctor()


@pytest.fixture
def patient(db):
    return make_patient()


@pytest.fixture
def tomorrow():
    return timezone.localdate() + dt.timedelta(days=1)


@pytest.fixture
def appointment(doctor, patient, tomorrow):
    return Appointment.objects.create(doctor=doctor, patient=patient, date=tomorrow, time='09:00')
