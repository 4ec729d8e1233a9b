import logging
from typing import Optional

from rest_framework.exceptions import NotFound

from clinic.exceptions import BadRequest, Conflict
from clinic.models import Doctor
from clinic.services.records import apply_fields, ensure_unique_email, save_or_conflict

logger = logging.getLogger(__name__)

EMAIL_TAKEN = 'Email already exists'


def get_doctor(doctor_id: int) -> Doctor:
    doctor = Doctor.objects.filter(id=doctor_id).first()
    if not doctor:
        raise NotFound('Doctor not found')
    return doctor


def list_doctors(*, specialty: Optional[str] = None) -> list[Doctor]:
    qs = Doctor.objects.all()
    if specialty:
        qs = qs.filter(specialty__iexact=specialty.strip())
    return list(qs)


def search_doctors(name: Optional[str]) -> list[Doctor]:
    name = (name or '').strip()
    if not name:
        raise BadRequest('Name parameter is required')
    return list(Doctor.objects.filter(name__icontains=name))


def create_doctor(data: dict) -> Doctor:
    """Create a doctor from validated serializer data."""
    data = dict(data)
    data['email'] = ensure_unique_email(Doctor, data['email'], label='doctor')
    doctor = save_or_conflict(Doctor(**data), EMAIL_TAKEN)
    logger.info("doctor created id=%s specialty=%s", doctor.id, doctor.specialty)
    return doctor


def update_doctor(doctor_id: int, data: dict) -> Doctor:
    """Apply a partial update; only keys present in ``data`` change."""
    doctor = get_doctor(doctor_id)
    data = dict(data)
    if 'email' in data:
        data['email'] = ensure_unique_email(Doctor, data['email'], label='doctor', exclude_id=doctor.id)
    save_or_conflict(apply_fields(doctor, data), EMAIL_TAKEN)
    logger.info("doctor updated id=%s fields=%s", doctor.id, sorted(data))
    return doctor


def update_slots(doctor_id: int, slots: list[dict]) -> Doctor:
    doctor = get_doctor(doctor_id)
    doctor.available_slots = [dict(slot) for slot in slots]
    doctor.save(update_fields=['available_slots', 'updated_at'])
    logger.info("doctor slots replaced id=%s count=%s", doctor.id, len(slots))
    return doctor


def delete_doctor(doctor_id: int) -> None:
    doctor = get_doctor(doctor_id)
    if doctor.appointments.exists():
        raise Conflict('Doctor has appointments', details='Delete or reassign the appointments of this doctor first')
    doctor.delete()
    logger.info("doctor deleted id=%s", doctor_id)
