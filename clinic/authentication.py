"""
Bearer token authentication.

Tokens are simplejwt access tokens signed with ``SECRET_KEY``.  The
user named by the token is looked up again on every request, so a
token issued to an account that has since been deleted stops working
immediately.  Kept in its own module so that settings can reference it
without importing any views.
"""
from __future__ import annotations

from rest_framework_simplejwt.authentication import JWTAuthentication


class BearerTokenAuthentication(JWTAuthentication):
    """JWT authentication reporting a ``medadmin`` realm on 401 responses.

    The realm ends up in the ``WWW-Authenticate`` header, which is also
    what makes DRF answer unauthenticated requests with 401 instead of 403.
    """

    www_authenticate_realm = 'medadmin'
