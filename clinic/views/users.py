"""
Account administration. Every route here is admin-only.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import IsAdminRole
from clinic.serializers.auth import UserSerializer, UserWriteSerializer
from clinic.services import users as service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_collection(request):
    if request.method == 'POST':
        s = UserWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        user = service.create_user(s.validated_data)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)
    return Response(UserSerializer(service.list_users(), many=True).data)


@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def user_detail(request, pk: int):
    if request.method == 'DELETE':
        service.delete_user(pk)
        return Response({'message': 'User deleted successfully'})

    service.get_user(pk)
    s = UserWriteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    user = service.update_user(pk, s.validated_data)
    return Response(UserSerializer(user).data)
