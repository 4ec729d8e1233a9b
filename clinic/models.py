"""
Database models for the hospital administration backend.

These models capture the clinical records managed by administrators
(doctors, patients, appointments) and the accounts used to sign in.
List-shaped attributes (availability slots, allergies, treatments...)
are stored as JSON so each record reads like a self-contained
document when serialised.
"""
from __future__ import annotations

import datetime as dt

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.db.models import Q


def normalize_email(value: str | None) -> str:
    """Lower-case and trim an email address for storage and lookups."""
    return (value or '').strip().lower()


def dedupe(items) -> list[str]:
    """Trim list entries and drop repeats, keeping the first occurrence."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items or []:
        item = str(item).strip()
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


class UserManager(BaseUserManager):
    """Manager for email-identified users (no username column)."""
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email must be set')
        user = self.model(email=normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """An account that can sign in to the administration API.

    Users are identified by their email address.  The ``role`` decides
    which endpoints are reachable: only ``admin`` may manage doctors,
    users and delete appointments.
    """
    ROLE_ADMIN = 'admin'
    ROLE_DOCTOR = 'doctor'
    ROLE_STAFF = 'staff'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_STAFF, 'Staff'),
    ]

    username = None
    first_name = None
    last_name = None
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_STAFF)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    objects = UserManager()

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Doctor(models.Model):
    SPECIALTIES = [
        'Cardiology',
        'Dermatology',
        'Endocrinology',
        'Gastroenterology',
        'Neurology',
        'Obstetrics and Gynecology',
        'Ophthalmology',
        'Orthopedics',
        'Pediatrics',
        'Psychiatry',
        'Urology',
        'General Medicine',
        'Emergency Medicine',
        'Family Medicine',
        'Internal Medicine',
        'Surgery',
    ]
    SPECIALTY_CHOICES = [(s, s) for s in SPECIALTIES]

    name = models.CharField(max_length=100)
    specialty = models.CharField(max_length=50, choices=SPECIALTY_CHOICES, db_index=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20)
    avatar_url = models.URLField(max_length=500, blank=True, null=True)
    # [{"day": "Monday", "startTime": "09:00", "endTime": "17:00"}, ...]
    available_slots = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name', 'id']

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} ({self.specialty})"


class Patient(models.Model):
    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    ]
    STATUS_ADMITTED = 'admitted'
    STATUS_DISCHARGED = 'discharged'
    STATUS_OUTPATIENT = 'outpatient'
    STATUS_CHOICES = [
        (STATUS_ADMITTED, 'Admitted'),
        (STATUS_DISCHARGED, 'Discharged'),
        (STATUS_OUTPATIENT, 'Outpatient'),
    ]
    BLOOD_TYPES = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']
    BLOOD_TYPE_CHOICES = [(b, b) for b in BLOOD_TYPES]
    LIST_FIELDS = ('allergies', 'medical_history', 'treatments')

    name = models.CharField(max_length=100)
    birthdate = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_OUTPATIENT, db_index=True)
    email = models.EmailField(max_length=100, unique=True)
    phone = models.CharField(max_length=20)
    address = models.CharField(max_length=200, blank=True, null=True)
    emergency_name = models.CharField(max_length=100, blank=True, null=True)
    emergency_phone = models.CharField(max_length=20, blank=True, null=True)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True, null=True)
    allergies = models.JSONField(default=list, blank=True)
    medical_history = models.JSONField(default=list, blank=True)
    treatments = models.JSONField(default=list, blank=True)
    medical_notes = models.TextField(max_length=1000, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name', 'id']

    def save(self, *args, **kwargs):
        self.email = normalize_email(self.email)
        for field in self.LIST_FIELDS:
            setattr(self, field, dedupe(getattr(self, field)))
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Appointment(models.Model):
    """A booking of one patient with one doctor at a date and time.

    ``time`` is kept as a zero-padded ``HH:MM`` string so that ordering
    and comparisons on the column follow the clock.  At most one
    non-cancelled appointment may exist per doctor, date and time; the
    conditional unique constraint below is the store-level guard for
    that rule.
    """
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_NO_SHOW = 'no-show'
    STATUS_RESCHEDULED = 'rescheduled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_NO_SHOW, 'No show'),
        (STATUS_RESCHEDULED, 'Rescheduled'),
    ]
    STATUSES = [value for value, _ in STATUS_CHOICES]

    doctor = models.ForeignKey(Doctor, on_delete=models.PROTECT, related_name='appointments')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='appointments')
    date = models.DateField()
    time = models.CharField(max_length=5)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, db_index=True)
    notes = models.TextField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date', 'time', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['doctor', 'date', 'time'],
                condition=~Q(status='cancelled'),
                name='uniq_active_doctor_slot',
            ),
        ]
        indexes = [
            models.Index(fields=['doctor', 'date', 'time'], name='clinic_appt_doctor_slot_idx'),
            models.Index(fields=['patient', 'date'], name='clinic_appt_patient_date_idx'),
        ]

    @property
    def datetime(self) -> dt.datetime:
        """Naive local datetime combining ``date`` and ``time``."""
        hours, minutes = (int(part) for part in self.time.split(':'))
        return dt.datetime.combine(self.date, dt.time(hours, minutes))

    def __str__(self) -> str:
        return f"appt d={self.doctor_id} p={self.patient_id} {self.date} {self.time} ({self.status})"
