import logging
from typing import Optional

from rest_framework.exceptions import NotFound

from clinic.exceptions import BadRequest, Conflict
from clinic.models import Patient
from clinic.services.records import apply_fields, ensure_unique_email, save_or_conflict

logger = logging.getLogger(__name__)

EMAIL_TAKEN = 'Email already exists'


def get_patient(patient_id: int) -> Patient:
    patient = Patient.objects.filter(id=patient_id).first()
    if not patient:
        raise NotFound('Patient not found')
    return patient


def list_patients() -> list[Patient]:
    return list(Patient.objects.all())


def search_patients(name: Optional[str]) -> list[Patient]:
    name = (name or '').strip()
    if not name:
        raise BadRequest('Name parameter is required')
    return list(Patient.objects.filter(name__icontains=name))


def create_patient(data: dict) -> Patient:
    data = dict(data)
    data['email'] = ensure_unique_email(Patient, data['email'], label='patient')
    patient = save_or_conflict(Patient(**data), EMAIL_TAKEN)
    logger.info("patient created id=%s", patient.id)
    return patient


def update_patient(patient_id: int, data: dict) -> Patient:
    patient = get_patient(patient_id)
    data = dict(data)
    if 'email' in data:
        data['email'] = ensure_unique_email(Patient, data['email'], label='patient', exclude_id=patient.id)
    save_or_conflict(apply_fields(patient, data), EMAIL_TAKEN)
    logger.info("patient updated id=%s fields=%s", patient.id, sorted(data))
    return patient


def delete_patient(patient_id: int) -> None:
    patient = get_patient(patient_id)
    if patient.appointments.exists():
        raise Conflict('Patient has appointments', details='Delete the appointments of this patient first')
    patient.delete()
    logger.info("patient deleted id=%s", patient_id)
