"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission

STAFF_ROLES = {"admin", "medico"}

class IsClinicStaff(BasePermission):
    """Allow access only to users with a clinic staff role."""
    message = "Acceso restringido al personal de la clínica."

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) in STAFF_ROLES)
