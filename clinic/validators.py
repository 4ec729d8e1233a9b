"""
Stateless format validators shared by the serializers.

Nothing in this module touches the database: existence and uniqueness
checks live in the service layer and run after these have passed.
"""
from __future__ import annotations

import html
import re

import bleach
from django.utils import timezone
from rest_framework import serializers

TIME_RE = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')
NAME_RE = re.compile(r"^[a-zA-Z\s\-']+$")
DOCTOR_PHONE_RE = re.compile(r'^\+?[1-9]\d{1,14}$')
PATIENT_PHONE_RE = re.compile(r'^(\+\d{1,2}\s?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}$')
BLOOD_TYPE_RE = re.compile(r'^(A|B|AB|O)[+-]$')

DAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']


def normalize_time(value: str, message: str = 'Time must be in HH:MM format (24-hour)') -> str:
    """Validate a 24-hour ``H:MM``/``HH:MM`` string and return it as ``HH:MM``."""
    value = (value or '').strip()
    if not TIME_RE.match(value):
        raise serializers.ValidationError(message)
    hours, minutes = value.split(':')
    return f"{int(hours):02d}:{minutes}"


def minutes_of(value: str) -> int:
    hours, minutes = value.split(':')
    return int(hours) * 60 + int(minutes)


def validate_person_name(value: str) -> str:
    value = (value or '').strip()
    if not NAME_RE.match(value):
        raise serializers.ValidationError('Name can only contain letters, spaces, hyphens, and apostrophes')
    return value


def validate_not_past(value):
    """Dates must be today or later in the server's local calendar."""
    if value < timezone.localdate():
        raise serializers.ValidationError('Appointment date cannot be in the past')
    return value


def validate_not_future(value):
    if value > timezone.localdate():
        raise serializers.ValidationError('Invalid birthdate.')
    return value


def regex_validator(pattern: re.Pattern, message: str):
    def _validate(value):
        if value is not None and not pattern.match(value):
            raise serializers.ValidationError(message)
        return value
    return _validate


def strip_markup(value: str) -> str:
    """Drop HTML tags but keep the text literal (``<`` and ``&`` survive)."""
    return html.unescape(bleach.clean(value, strip=True))
