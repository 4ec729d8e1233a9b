"""
Authentication views.

``login_view`` exchanges an email/password pair for a bearer token and
``me`` returns the account behind the token.  The authentication class
itself lives in ``clinic.authentication`` so that settings can import
it without pulling in views.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.auth import LoginSerializer, UserSerializer
from clinic.services import users as service


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Accepts ``{email, password}`` and returns ``{token, user}``.

    Unknown emails and wrong passwords both produce 401 "Invalid
    credentials".
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    return Response(service.login(vd['email'], vd['password']))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(UserSerializer(request.user).data)
