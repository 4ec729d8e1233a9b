import logging
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from rest_framework.test import APIClient

from clinic.models import User

pytestmark = pytest.mark.django_db


def test_healthz():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}


def test_unknown_url_returns_json_404():
    r = APIClient().get('/api/nothing-here')
    assert r.status_code == 404
    assert r.json() == {'error': 'Not found'}


def test_requests_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger='clinic.middleware'):
        APIClient().get('/healthz')
    assert 'GET /healthz -> 200' in caplog.text


def test_malformed_json_is_400(staff_client):
    r = staff_client.post('/api/appointments', data='{"doctorId": ', content_type='application/json')
    assert r.status_code == 400
    assert 'error' in r.data


def test_create_admin_is_idempotent():
    out = StringIO()
    call_command('create_admin', email='Root@Example.com', password='secret1', name='Root', stdout=out)
    user = User.objects.get(email='root@example.com')
    assert user.role == 'admin'
    assert user.is_superuser
    assert user.check_password('secret1')
    assert 'created' in out.getvalue()

    out = StringIO()
    call_command('create_admin', email='root@example.com', password='another1', stdout=out)
    assert 'already exists' in out.getvalue()
    assert User.objects.filter(email='root@example.com').count() == 1


def test_create_admin_uses_settings_defaults(settings):
    settings.ADMIN_EMAIL = 'boss@example.com'
    settings.ADMIN_PASSWORD = 'bosspass'
    settings.ADMIN_NAME = 'Boss'
    call_command('create_admin', stdout=StringIO())
    assert User.objects.get(email='boss@example.com').name == 'Boss'


def test_create_admin_requires_password(settings):
    settings.ADMIN_PASSWORD = ''
    with pytest.raises(CommandError):
        call_command('create_admin', email='nopass@example.com', stdout=StringIO())
