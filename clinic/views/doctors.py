"""
Doctor directory endpoints.

Reading the directory is public so that the booking form can list
doctors; creating, editing and deleting doctors is reserved for
administrators.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import IsAdminOrReadOnly
from clinic.serializers.doctor import DoctorSerializer, DoctorSlotsSerializer
from clinic.services import doctors as service


@api_view(['GET', 'POST'])
@permission_classes([IsAdminOrReadOnly])
def doctor_collection(request):
    if request.method == 'POST':
        s = DoctorSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        doctor = service.create_doctor(s.validated_data)
        return Response(DoctorSerializer(doctor).data, status=status.HTTP_201_CREATED)

    specialty = (request.query_params.get('specialty') or '').strip() or None
    return Response(DoctorSerializer(service.list_doctors(specialty=specialty), many=True).data)


@api_view(['GET'])
@permission_classes([IsAdminOrReadOnly])
def search_doctors(request):
    """Case-insensitive name search: ``?name=smith``."""
    doctors = service.search_doctors(request.query_params.get('name'))
    return Response(DoctorSerializer(doctors, many=True).data)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAdminOrReadOnly])
def doctor_detail(request, pk: int):
    if request.method == 'GET':
        return Response(DoctorSerializer(service.get_doctor(pk)).data)

    if request.method == 'DELETE':
        service.delete_doctor(pk)
        return Response({'message': 'Doctor deleted successfully'})

    service.get_doctor(pk)
    s = DoctorSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    doctor = service.update_doctor(pk, s.validated_data)
    return Response(DoctorSerializer(doctor).data)


@api_view(['PATCH'])
@permission_classes([IsAdminOrReadOnly])
def doctor_slots(request, pk: int):
    """Replace the weekly availability of a doctor."""
    service.get_doctor(pk)
    s = DoctorSlotsSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    doctor = service.update_slots(pk, s.validated_data['availableSlots'])
    return Response(DoctorSerializer(doctor).data)
