"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from clinic.models import User


class IsAdminRole(BasePermission):
    """Allow access only to users with the administrator role."""
    message = 'Insufficient permissions'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == User.ROLE_ADMIN)


class IsAdminOrReadOnly(BasePermission):
    """Anyone may read; writes need the administrator role."""
    message = 'Insufficient permissions'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method in SAFE_METHODS:
            return True
        return IsAdminRole().has_permission(request, view)


class IsAdminToDelete(BasePermission):
    """DELETE is reserved for administrators; other methods pass through."""
    message = 'Insufficient permissions'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method != 'DELETE':
            return True
        return IsAdminRole().has_permission(request, view)
