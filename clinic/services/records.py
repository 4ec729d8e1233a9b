"""
Helpers shared by the per-entity services.
"""
from __future__ import annotations

from django.db import IntegrityError, models, transaction

from clinic.exceptions import Conflict
from clinic.models import normalize_email


def ensure_unique_email(model: type[models.Model], email: str, *, label: str, exclude_id: int | None = None) -> str:
    """Raise Conflict if another ``model`` row already uses ``email``."""
    email = normalize_email(email)
    qs = model.objects.filter(email=email)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise Conflict('Email already exists', details=f'A {label} with email {email} already exists')
    return email


def save_or_conflict(instance: models.Model, message: str = 'Conflict', details: str | None = None):
    """Save inside a savepoint; a constraint violation becomes Conflict."""
    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError as exc:
        raise Conflict(message, details=details or 'Duplicate or conflicting record') from exc
    return instance


def apply_fields(instance: models.Model, data: dict) -> models.Model:
    for field, value in data.items():
        setattr(instance, field, value)
    return instance
