"""
Integration tests for appointment booking.

These tests exercise the scheduling rules end to end through the API:
one active booking per doctor slot, cancelled bookings freeing their
slot, partial updates and status transitions.  They use Django REST
Framework's APIClient within the APITestCase base class.
"""
import datetime as dt
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from clinic.exceptions import Conflict
from clinic.models import Appointment, User
from clinic.services.appointments import recent_appointments
from clinic.services.records import save_or_conflict
from clinic.tests.conftest import bearer, make_doctor, make_patient


class AppointmentAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(email='admin@example.com', password='adminpass', name='Admin', role='admin')
        self.staff = User.objects.create_user(email='staff@example.com', password='staffpass', name='Staff', role='staff')
        self.doctor = make_doctor(name='Lisa Cuddy', specialty='Cardiology', email='cuddy@example.com')
        self.other_doctor = make_doctor(name='James Wilson', specialty='Neurology', email='wilson@example.com')
        self.patient = make_patient()
        self.tomorrow = timezone.localdate() + dt.timedelta(days=1)
        bearer(self.client, self.staff)

    def book(self, time='09:00', **extra):
        payload = {
            'doctorId': self.doctor.id,
            'patientId': self.patient.id,
            'date': self.tomorrow.isoformat(),
            'time': time,
        }
        payload.update(extra)
        return self.client.post('/api/appointments', payload, format='json')

    def test_booking_scenario(self):
        first = self.book('09:00')
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertEqual(first.data['doctorId'], self.doctor.id)
        self.assertEqual(first.data['patientId'], self.patient.id)
        self.assertEqual(first.data['date'], self.tomorrow.isoformat())
        self.assertEqual(first.data['time'], '09:00')
        self.assertEqual(first.data['status'], 'scheduled')
        self.assertEqual(first.data['doctor'], {'id': self.doctor.id, 'name': 'Lisa Cuddy', 'specialty': 'Cardiology'})

        again = self.book('09:00')
        self.assertEqual(again.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(again.data['error'], 'Scheduling conflict')
        self.assertEqual(again.data['details'], 'Doctor already has an appointment scheduled at this time')

        later = self.book('09:30')
        self.assertEqual(later.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Appointment.objects.count(), 2)

    def test_other_doctor_same_slot_is_free(self):
        self.assertEqual(self.book('09:00').status_code, 201)
        r = self.book('09:00', doctorId=self.other_doctor.id)
        self.assertEqual(r.status_code, 201)

    def test_cancelled_slot_can_be_rebooked(self):
        Appointment.objects.create(doctor=self.doctor, patient=self.patient, date=self.tomorrow,
                                   time='10:00', status='cancelled')
        r = self.book('10:00')
        self.assertEqual(r.status_code, 201)

    def test_time_is_stored_zero_padded(self):
        r = self.book('9:05')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['time'], '09:05')
        self.assertEqual(self.book('09:05').status_code, 409)

    def test_invalid_times_rejected(self):
        for bad in ('25:61', '9:5'):
            r = self.book(bad)
            self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST, bad)
            self.assertEqual(r.data['error'], 'Validation failed')
            self.assertEqual(r.data['details'][0]['path'], 'time')

    def test_past_date_rejected(self):
        yesterday = timezone.localdate() - dt.timedelta(days=1)
        r = self.book(date=yesterday.isoformat())
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['details'], [{'path': 'date', 'message': 'Appointment date cannot be in the past'}])

    def test_iso_datetime_date_accepted(self):
        r = self.book(date=f'{self.tomorrow.isoformat()}T00:00:00.000Z')
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.data['date'], self.tomorrow.isoformat())

    def test_unknown_doctor_or_patient(self):
        r = self.book(doctorId=999999)
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.data, {'error': 'Doctor not found'})
        r = self.book(patientId=999999)
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.data, {'error': 'Patient not found'})

    def test_invalid_status_rejected(self):
        r = self.book(status='done')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data['details'][0]['message'], 'Please select a valid appointment status')

    def test_update_into_taken_slot_conflicts(self):
        self.book('09:00')
        second = self.book('10:00', notes='bring x-rays').data
        r = self.client.patch(f"/api/appointments/{second['id']}", {'time': '09:00'}, format='json')
        self.assertEqual(r.status_code, 409)
        self.assertEqual(Appointment.objects.get(id=second['id']).time, '10:00')

    def test_update_to_free_slot_keeps_other_fields(self):
        created = self.book('10:00', notes='bring x-rays').data
        r = self.client.patch(f"/api/appointments/{created['id']}", {'time': '11:15'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['time'], '11:15')
        self.assertEqual(r.data['notes'], 'bring x-rays')
        self.assertEqual(r.data['status'], 'scheduled')
        self.assertEqual(r.data['doctorId'], self.doctor.id)

    def test_update_same_slot_is_not_a_conflict_with_itself(self):
        created = self.book('10:00').data
        r = self.client.patch(f"/api/appointments/{created['id']}",
                              {'time': '10:00', 'notes': 'moved nothing'}, format='json')
        self.assertEqual(r.status_code, 200)

    def test_update_unknown_appointment(self):
        r = self.client.patch('/api/appointments/424242', {'notes': 'x'}, format='json')
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.data, {'error': 'Appointment not found'})

    def test_status_transition(self):
        created = self.book('09:00').data
        r = self.client.patch(f"/api/appointments/{created['id']}/status", {'status': 'completed'}, format='json')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['status'], 'completed')

        r = self.client.patch('/api/appointments/424242/status', {'status': 'completed'}, format='json')
        self.assertEqual(r.status_code, 404)

        r = self.client.patch(f"/api/appointments/{created['id']}/status", {}, format='json')
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.data, {'error': 'Status is required'})

        r = self.client.patch(f"/api/appointments/{created['id']}/status", {'status': 'finished'}, format='json')
        self.assertEqual(r.status_code, 400)

    def test_reopening_cancelled_booking_into_taken_slot_conflicts(self):
        cancelled = Appointment.objects.create(doctor=self.doctor, patient=self.patient, date=self.tomorrow,
                                               time='09:00', status='cancelled')
        self.assertEqual(self.book('09:00').status_code, 201)
        r = self.client.patch(f'/api/appointments/{cancelled.id}/status', {'status': 'scheduled'}, format='json')
        self.assertEqual(r.status_code, 409)
        cancelled.refresh_from_db()
        self.assertEqual(cancelled.status, 'cancelled')

    def test_store_constraint_blocks_duplicate_slot(self):
        Appointment.objects.create(doctor=self.doctor, patient=self.patient, date=self.tomorrow, time='08:00')
        duplicate = Appointment(doctor=self.doctor, patient=self.patient, date=self.tomorrow, time='08:00')
        with self.assertRaises(Conflict):
            save_or_conflict(duplicate, 'Scheduling conflict')
        self.assertEqual(Appointment.objects.filter(time='08:00').count(), 1)

    def test_rejected_booking_is_logged(self):
        self.book('09:00')
        with self.assertLogs('clinic.services.appointments', level=logging.WARNING) as logs:
            self.book('09:00')
        self.assertIn('booking rejected', logs.output[0])

    def test_delete_requires_admin(self):
        created = self.book('09:00').data
        r = self.client.delete(f"/api/appointments/{created['id']}")
        self.assertEqual(r.status_code, 403)

        bearer(self.client, self.admin)
        r = self.client.delete(f"/api/appointments/{created['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertFalse(Appointment.objects.filter(id=created['id']).exists())

    def test_requires_authentication(self):
        self.client.credentials()
        self.assertEqual(self.client.get('/api/appointments').status_code, 401)
        self.assertEqual(self.book('09:00').status_code, 401)


class AppointmentReadTests(APITestCase):
    def setUp(self) -> None:
        self.staff = User.objects.create_user(email='staff@example.com', password='staffpass', name='Staff')
        bearer(self.client, self.staff)
        self.doctor = make_doctor()
        self.patient = make_patient()
        self.today = timezone.localdate()
        self.tomorrow = self.today + dt.timedelta(days=1)
        self.soon = Appointment.objects.create(doctor=self.doctor, patient=self.patient,
                                               date=self.tomorrow, time='09:00')
        self.later = Appointment.objects.create(doctor=self.doctor, patient=self.patient,
                                                date=self.today + dt.timedelta(days=5), time='08:00')
        self.far = Appointment.objects.create(doctor=self.doctor, patient=self.patient,
                                              date=self.today + dt.timedelta(days=60), time='08:00')
        self.cancelled = Appointment.objects.create(doctor=self.doctor, patient=self.patient,
                                                    date=self.tomorrow, time='10:00', status='cancelled')

    def test_list_and_date_filter(self):
        r = self.client.get('/api/appointments')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(len(r.data), 4)
        self.assertEqual(r.data[0]['patient'], {'id': self.patient.id, 'name': 'Jane Roe', 'email': 'jane@example.com'})

        r = self.client.get(f'/api/appointments?date={self.tomorrow.isoformat()}')
        self.assertEqual([a['time'] for a in r.data], ['09:00', '10:00'])

        r = self.client.get('/api/appointments?date=tomorrow')
        self.assertEqual(r.status_code, 400)

    def test_by_doctor_and_patient(self):
        r = self.client.get(f'/api/appointments/doctor/{self.doctor.id}')
        self.assertEqual(len(r.data), 4)
        r = self.client.get(f'/api/appointments/patient/{self.patient.id}')
        self.assertEqual(len(r.data), 4)
        self.assertEqual(self.client.get('/api/appointments/doctor/999999').status_code, 404)
        self.assertEqual(self.client.get('/api/appointments/patient/999999').status_code, 404)

    def test_empty_lists_are_not_errors(self):
        other = make_doctor(email='idle@example.com', name='Idle Doctor')
        r = self.client.get(f'/api/appointments/doctor/{other.id}')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data, [])

    def test_upcoming_skips_cancelled(self):
        r = self.client.get('/api/appointments/upcoming?limit=2')
        self.assertEqual(r.status_code, 200)
        self.assertEqual([a['id'] for a in r.data], [self.soon.id, self.later.id])

    def test_recent_window_and_shape(self):
        r = self.client.get('/api/appointments/recent?days=30&upcoming=true')
        self.assertEqual(r.status_code, 200)
        self.assertEqual([a['id'] for a in r.data], [self.soon.id, self.cancelled.id, self.later.id])
        self.assertEqual(r.data[0], {
            'id': self.soon.id,
            'doctor': {'name': self.doctor.name, 'specialty': self.doctor.specialty},
            'patient': {'name': self.patient.name},
            'date': self.tomorrow.isoformat(),
            'time': '09:00',
            'status': 'scheduled',
        })

    def test_recent_descending_and_filters(self):
        r = self.client.get('/api/appointments/recent?days=90&upcoming=false&status=scheduled')
        self.assertEqual([a['id'] for a in r.data], [self.far.id, self.later.id, self.soon.id])
        r = self.client.get('/api/appointments/recent?limit=abc')
        self.assertEqual(r.status_code, 400)

    def test_get_single(self):
        r = self.client.get(f'/api/appointments/{self.soon.id}')
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.data['datetime'], f'{self.tomorrow.isoformat()}T09:00')


class RecentServiceDefaultsTests(APITestCase):
    def test_recent_defaults_to_latest_first(self):
        doctor = make_doctor()
        patient = make_patient()
        today = timezone.localdate()
        near = Appointment.objects.create(doctor=doctor, patient=patient,
                                          date=today + dt.timedelta(days=1), time='09:00')
        later = Appointment.objects.create(doctor=doctor, patient=patient,
                                           date=today + dt.timedelta(days=3), time='09:00')
        self.assertEqual([a.id for a in recent_appointments()], [later.id, near.id])
