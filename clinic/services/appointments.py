"""
Appointment booking and scheduling rules.

A doctor can hold at most one non-cancelled appointment per date and
time.  ``check_conflict`` is the read-side check that produces a
readable error; the conditional unique constraint on the table is the
final guard when two bookings race for the same slot.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound

from clinic.exceptions import Conflict
from clinic.models import Appointment
from clinic.services.doctors import get_doctor
from clinic.services.patients import get_patient
from clinic.services.records import save_or_conflict

logger = logging.getLogger(__name__)

CONFLICT_ERROR = 'Scheduling conflict'
CONFLICT_DETAILS = 'Doctor already has an appointment scheduled at this time'
SLOT_FIELDS = ('doctorId', 'date', 'time', 'status')


def _base_qs():
    return Appointment.objects.select_related('doctor', 'patient')


def check_conflict(doctor_id: int, date: dt.date, time: str, *, exclude_id: Optional[int] = None) -> None:
    """Raise Conflict if the doctor already has an active booking at date/time."""
    qs = Appointment.objects.filter(doctor_id=doctor_id, date=date, time=time).exclude(
        status=Appointment.STATUS_CANCELLED
    )
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        logger.warning("booking rejected doctor=%s slot=%s %s", doctor_id, date, time)
        raise Conflict(CONFLICT_ERROR, details=CONFLICT_DETAILS)


def _save(appointment: Appointment) -> Appointment:
    return save_or_conflict(appointment, CONFLICT_ERROR, CONFLICT_DETAILS)


def get_appointment(appointment_id: int) -> Appointment:
    appointment = _base_qs().filter(id=appointment_id).first()
    if not appointment:
        raise NotFound('Appointment not found')
    return appointment


def create_appointment(data: dict) -> Appointment:
    """Book an appointment from validated input.

    ``data`` carries ``doctorId``, ``patientId``, ``date``, ``time`` and
    optionally ``status`` and ``notes``.  The doctor is resolved before
    the patient, and both before the slot is checked.
    """
    doctor = get_doctor(data['doctorId'])
    patient = get_patient(data['patientId'])
    status = data.get('status') or Appointment.STATUS_SCHEDULED
    if status != Appointment.STATUS_CANCELLED:
        check_conflict(doctor.id, data['date'], data['time'])
    appointment = _save(Appointment(
        doctor=doctor,
        patient=patient,
        date=data['date'],
        time=data['time'],
        status=status,
        notes=data.get('notes'),
    ))
    logger.info("appointment booked id=%s doctor=%s slot=%s %s",
                appointment.id, doctor.id, appointment.date, appointment.time)
    return appointment


def update_appointment(appointment_id: int, data: dict) -> Appointment:
    """Partially update an appointment, re-checking the slot when it moves."""
    appointment = get_appointment(appointment_id)
    if 'doctorId' in data:
        appointment.doctor = get_doctor(data['doctorId'])
    if 'patientId' in data:
        appointment.patient = get_patient(data['patientId'])
    for field in ('date', 'time', 'status', 'notes'):
        if field in data:
            setattr(appointment, field, data[field])

    moved = any(field in data for field in SLOT_FIELDS)
    if moved and appointment.status != Appointment.STATUS_CANCELLED:
        check_conflict(appointment.doctor_id, appointment.date, appointment.time, exclude_id=appointment.id)
    _save(appointment)
    logger.info("appointment updated id=%s fields=%s", appointment.id, sorted(data))
    return appointment


def update_status(appointment_id: int, status: str) -> Appointment:
    appointment = get_appointment(appointment_id)
    reopening = (appointment.status == Appointment.STATUS_CANCELLED
                 and status != Appointment.STATUS_CANCELLED)
    if reopening:
        check_conflict(appointment.doctor_id, appointment.date, appointment.time, exclude_id=appointment.id)
    appointment.status = status
    _save(appointment)
    logger.info("appointment status id=%s -> %s", appointment.id, status)
    return appointment


def delete_appointment(appointment_id: int) -> None:
    appointment = get_appointment(appointment_id)
    appointment.delete()
    logger.info("appointment deleted id=%s", appointment_id)


def list_appointments(*, date: Optional[dt.date] = None) -> list[Appointment]:
    qs = _base_qs()
    if date is not None:
        qs = qs.filter(date=date)
    return list(qs.order_by('date', 'time', 'id'))


def appointments_for_doctor(doctor_id: int) -> list[Appointment]:
    doctor = get_doctor(doctor_id)
    return list(_base_qs().filter(doctor=doctor).order_by('date', 'time', 'id'))


def appointments_for_patient(patient_id: int) -> list[Appointment]:
    patient = get_patient(patient_id)
    return list(_base_qs().filter(patient=patient).order_by('date', 'time', 'id'))


def upcoming_appointments(limit: int = 10) -> list[Appointment]:
    today = timezone.localdate()
    qs = (_base_qs()
          .filter(date__gte=today)
          .exclude(status=Appointment.STATUS_CANCELLED)
          .order_by('date', 'time', 'id'))
    return list(qs[:limit])


def recent_appointments(*, days: int = 30, limit: int = 10, status: Optional[str] = None,
                        doctor_id: Optional[int] = None, patient_id: Optional[int] = None,
                        upcoming: bool = False) -> list[Appointment]:
    """Appointments between today and ``today + days`` for the dashboard.

    With ``upcoming`` only bookings that have not started yet are kept
    and the soonest come first; otherwise the latest come first.
    """
    now = timezone.localtime()
    today = now.date()
    qs = _base_qs().filter(date__gte=today, date__lte=today + dt.timedelta(days=days))
    if status:
        qs = qs.filter(status=status)
    if doctor_id:
        qs = qs.filter(doctor_id=doctor_id)
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    if upcoming:
        qs = qs.filter(Q(date__gt=today) | Q(date=today, time__gte=now.strftime('%H:%M')))
        qs = qs.order_by('date', 'time', 'id')
    else:
        qs = qs.order_by('-date', '-time', '-id')
    return list(qs[:limit])
