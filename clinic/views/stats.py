"""
Dashboard statistics endpoint.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.stats import dashboard_counts


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stats(request):
    """Return record counts for doctors, patients and appointments.

    ``todayAppointments`` counts every appointment dated today,
    whatever its status.
    """
    return Response(dashboard_counts())
