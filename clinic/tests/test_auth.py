from datetime import timedelta

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from clinic.models import User
from clinic.tests.conftest import bearer

pytestmark = pytest.mark.django_db


def login(client, email, password):
    return client.post('/api/users/login', {'email': email, 'password': password}, format='json')


def test_login_returns_token_and_user(anon_client, admin_user):
    r = login(anon_client, 'ADMIN@example.com ', 'adminpass')
    assert r.status_code == 200
    assert r.data['user'] == {'id': admin_user.id, 'name': 'Admin', 'email': 'admin@example.com', 'role': 'admin'}
    token = AccessToken(r.data['token'])
    assert str(token['user_id']) == str(admin_user.id)

    anon_client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    me = anon_client.get('/api/users/me')
    assert me.status_code == 200
    assert me.data['email'] == 'admin@example.com'
    assert 'password' not in me.data


@pytest.mark.parametrize('email,password', [
    ('admin@example.com', 'wrong-password'),
    ('nobody@example.com', 'adminpass'),
])
def test_login_rejects_bad_credentials(anon_client, admin_user, email, password):
    r = login(anon_client, email, password)
    assert r.status_code == 401
    assert r.data == {'error': 'Invalid credentials'}


def test_login_validates_payload(anon_client):
    r = anon_client.post('/api/users/login', {'email': 'not-an-email'}, format='json')
    assert r.status_code == 400
    assert {d['path'] for d in r.data['details']} == {'email', 'password'}


def test_missing_header_is_401(anon_client):
    r = anon_client.get('/api/users/me')
    assert r.status_code == 401
    assert 'error' in r.data


def test_bad_token_is_401(anon_client):
    anon_client.credentials(HTTP_AUTHORIZATION='Bearer not.a.token')
    assert anon_client.get('/api/stats').status_code == 401


def test_token_of_deleted_user_is_401(staff_user):
    client = bearer(APIClient(), staff_user)
    assert client.get('/api/users/me').status_code == 200
    staff_user.delete()
    assert client.get('/api/users/me').status_code == 401


def test_role_gate(staff_client, admin_client):
    assert staff_client.get('/api/users').status_code == 403
    r = admin_client.get('/api/users')
    assert r.status_code == 200
    assert {u['email'] for u in r.data} == {'admin@example.com', 'staff@example.com'}


def test_admin_manages_users(admin_client):
    payload = {'name': 'Dr Who', 'email': 'Who@Example.com', 'password': 'tardis1', 'role': 'doctor'}
    r = admin_client.post('/api/users', payload, format='json')
    assert r.status_code == 201
    assert r.data['email'] == 'who@example.com'
    assert 'password' not in r.data
    user = User.objects.get(email='who@example.com')
    assert user.check_password('tardis1')

    assert admin_client.post('/api/users', payload, format='json').status_code == 409

    r = admin_client.patch(f'/api/users/{user.id}', {'role': 'staff'}, format='json')
    assert r.status_code == 200
    assert r.data['role'] == 'staff'

    assert admin_client.delete(f'/api/users/{user.id}').status_code == 200
    assert admin_client.delete(f'/api/users/{user.id}').status_code == 404


def test_user_payload_rules(admin_client):
    r = admin_client.post('/api/users', {'name': 'X', 'email': 'x@example.com', 'password': '123', 'role': 'root'},
                          format='json')
    assert r.status_code == 400
    assert {d['path'] for d in r.data['details']} == {'name', 'password', 'role'}


def test_new_user_defaults_to_staff(admin_client):
    r = admin_client.post('/api/users', {'name': 'Nurse Joy', 'email': 'joy@example.com', 'password': 'pokemon'},
                          format='json')
    assert r.status_code == 201
    assert r.data['role'] == 'staff'


def test_expired_token_is_401(staff_user):
    token = AccessToken.for_user(staff_user)
    token.set_exp(lifetime=-timedelta(seconds=1))
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert client.get('/api/users/me').status_code == 401


def test_token_lives_for_a_day(anon_client, staff_user):
    r = login(anon_client, 'staff@example.com', 'staffpass')
    token = AccessToken(r.data['token'])
    assert token['exp'] - token['iat'] == 24 * 3600
