"""
Account services: credential checks, token issuance and admin-side
user management.
"""
from __future__ import annotations

import logging

from rest_framework.exceptions import AuthenticationFailed, NotFound
from rest_framework_simplejwt.tokens import AccessToken

from clinic.models import User, normalize_email
from clinic.services.records import apply_fields, ensure_unique_email, save_or_conflict

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials'


def authenticate_user(email: str, password: str) -> User:
    """Resolve a user by email and verify the password hash.

    The same error is raised for an unknown email and a wrong password.
    """
    user = User.objects.filter(email=normalize_email(email)).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.warning("login failed email=%s", normalize_email(email))
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    return user


def issue_token(user: User) -> str:
    return str(AccessToken.for_user(user))


def login(email: str, password: str) -> dict:
    user = authenticate_user(email, password)
    logger.info("login ok user=%s", user.id)
    return {
        'token': issue_token(user),
        'user': {'id': user.id, 'name': user.name, 'email': user.email, 'role': user.role},
    }


def get_user(user_id: int) -> User:
    user = User.objects.filter(id=user_id).first()
    if not user:
        raise NotFound('User not found')
    return user


def list_users() -> list[User]:
    return list(User.objects.order_by('id'))


def create_user(data: dict) -> User:
    email = ensure_unique_email(User, data['email'], label='user')
    user = User(email=email, name=data['name'], role=data.get('role') or User.ROLE_STAFF)
    user.set_password(data['password'])
    save_or_conflict(user, 'Email already exists')
    logger.info("user created id=%s role=%s", user.id, user.role)
    return user


def update_user(user_id: int, data: dict) -> User:
    user = get_user(user_id)
    data = dict(data)
    password = data.pop('password', None)
    if 'email' in data:
        data['email'] = ensure_unique_email(User, data['email'], label='user', exclude_id=user.id)
    apply_fields(user, data)
    if password:
        user.set_password(password)
    save_or_conflict(user, 'Email already exists')
    logger.info("user updated id=%s fields=%s", user.id, sorted(data))
    return user


def delete_user(user_id: int) -> None:
    user = get_user(user_id)
    user.delete()
    logger.info("user deleted id=%s", user_id)
