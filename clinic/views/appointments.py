"""
Appointment endpoints.

Booking and rescheduling go through ``clinic.services.appointments``,
which owns the one-booking-per-doctor-slot rule.  Every route needs a
signed-in user and only administrators may delete appointments.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.exceptions import BadRequest
from clinic.permissions import IsAdminToDelete
from clinic.serializers.appointment import (
    AppointmentInputSerializer,
    AppointmentListQuerySerializer,
    AppointmentSerializer,
    AppointmentStatusSerializer,
    RecentQuerySerializer,
    UpcomingQuerySerializer,
    recent_item,
)
from clinic.services import appointments as service


def _many(appointments):
    return AppointmentSerializer(appointments, many=True).data


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointment_collection(request):
    if request.method == 'POST':
        s = AppointmentInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        appointment = service.create_appointment(s.validated_data)
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)

    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(_many(service.list_appointments(date=q.validated_data.get('date'))))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def recent_appointments(request):
    """Dashboard feed.

    Query params (all optional):
      - days: window length from today, default 30
      - limit: maximum rows, default 10
      - status, doctorId, patientId: filters
      - upcoming: ``true`` keeps only bookings not yet started, soonest first
    """
    q = RecentQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    appointments = service.recent_appointments(
        days=vd['days'],
        limit=vd['limit'],
        status=vd.get('status'),
        doctor_id=vd.get('doctorId'),
        patient_id=vd.get('patientId'),
        upcoming=vd['upcoming'],
    )
    return Response([recent_item(a) for a in appointments])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def upcoming_appointments(request):
    q = UpcomingQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(_many(service.upcoming_appointments(limit=q.validated_data['limit'])))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def doctor_appointments(request, doctor_id: int):
    return Response(_many(service.appointments_for_doctor(doctor_id)))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_appointments(request, patient_id: int):
    return Response(_many(service.appointments_for_patient(patient_id)))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminToDelete])
def appointment_detail(request, pk: int):
    if request.method == 'GET':
        return Response(AppointmentSerializer(service.get_appointment(pk)).data)

    if request.method == 'DELETE':
        service.delete_appointment(pk)
        return Response({'message': 'Appointment deleted successfully'})

    service.get_appointment(pk)
    s = AppointmentInputSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    appointment = service.update_appointment(pk, s.validated_data)
    return Response(AppointmentSerializer(appointment).data)


@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def appointment_status(request, pk: int):
    if not (isinstance(request.data, dict) and request.data.get('status')):
        raise BadRequest('Status is required')
    s = AppointmentStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    appointment = service.update_status(pk, s.validated_data['status'])
    return Response(AppointmentSerializer(appointment).data)
