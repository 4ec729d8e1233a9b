"""
Patient record endpoints.

All routes need a signed-in user; deleting a patient additionally
needs the administrator role.  ``PUT`` behaves like ``PATCH``: only the
fields present in the body are changed.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminToDelete
from clinic.serializers.patient import PatientSerializer
from clinic.services import patients as service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patient_collection(request):
    if request.method == 'POST':
        s = PatientSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        patient = service.create_patient(s.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)
    return Response(PatientSerializer(service.list_patients(), many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_patients(request):
    patients = service.search_patients(request.query_params.get('name'))
    return Response(PatientSerializer(patients, many=True).data)


@api_view(['GET', 'PATCH', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminToDelete])
def patient_detail(request, pk: int):
    if request.method == 'GET':
        return Response(PatientSerializer(service.get_patient(pk)).data)

    if request.method == 'DELETE':
        service.delete_patient(pk)
        return Response({'message': 'Patient deleted successfully'})

    service.get_patient(pk)
    s = PatientSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    patient = service.update_patient(pk, s.validated_data)
    return Response(PatientSerializer(patient).data)
