from rest_framework import permissions
from .models import User

# Roles allowed to run the front-of-house flows (reservations, sessions, bills).
FLOOR_ROLES = [User.Role.MANAGER, User.Role.WAITER, User.Role.CASHIER]

# Floor staff plus the kitchen, who advance order and item statuses.
SERVICE_ROLES = FLOOR_ROLES + [User.Role.KITCHEN_STAFF]


def _has_role(request, roles):
    user = request.user
    return bool(user and user.is_authenticated and user.role in roles)


class IsManager(permissions.BasePermission):
    def has_permission(self, request, view):
        return _has_role(request, [User.Role.MANAGER])


class IsFloorStaff(permissions.BasePermission):
    """Managers, waiters and cashiers."""

    def has_permission(self, request, view):
        return _has_role(request, FLOOR_ROLES)


class IsServiceStaff(permissions.BasePermission):
    """Any staff role, kitchen included."""

    def has_permission(self, request, view):
        return _has_role(request, SERVICE_ROLES)


class IsManagerOrKitchen(permissions.BasePermission):
    """Who may mark menu items available or unavailable."""

    def has_permission(self, request, view):
        return _has_role(request, [User.Role.MANAGER, User.Role.KITCHEN_STAFF])


class ReadOnlyOrManager(permissions.BasePermission):
    """
    Any staff role may read; only managers may create, update or delete.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return _has_role(request, SERVICE_ROLES)
        return _has_role(request, [User.Role.MANAGER])


class CanUpdateItemStatus(permissions.BasePermission):
    """Kitchen advances items; waiters and managers may too (e.g. SERVED)."""

    def has_permission(self, request, view):
        return _has_role(
            request, [User.Role.KITCHEN_STAFF, User.Role.WAITER, User.Role.MANAGER]
        )
