"""Custom DRF permissions for the InvestDesk API."""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from accounts.context import SessionContext


def session_context(request) -> SessionContext:
    """Caller context for this request, built once and cached on the request."""
    context = getattr(request, "_session_context", None)
    if context is None:
        context = SessionContext.from_request(request)
        request._session_context = context
    return context


class IsAdminRole(BasePermission):
    """Allow super administrators, administrators and Django superusers."""

    message = "Cette operation est reservee aux administrateurs."

    def has_permission(self, request, view):
        return session_context(request).is_admin


class IsAdminOrReadOnly(BasePermission):
    """Anyone authenticated may read; only administrators may write."""

    message = "Cette operation est reservee aux administrateurs."

    def has_permission(self, request, view):
        context = session_context(request)
        if not context.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return context.is_admin


class IsAdminOrOwner(BasePermission):
    """Object-level: administrators, or the employee the object belongs to."""

    owner_field = "employee_id"

    def has_object_permission(self, request, view, obj):
        context = session_context(request)
        if context.is_admin:
            return True
        return context.user is not None and getattr(obj, self.owner_field, None) == context.user.pk
