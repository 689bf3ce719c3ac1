# apps/chambers/permissions.py

from rest_framework import permissions
from core.constants import UserRoles


class ChamberPermissions(permissions.BasePermission):
    """
    Anyone authenticated may read chambers.
    Admins create, delete and verify; office managers may also edit.
    """

    ADMIN_ACTIONS = ['create', 'destroy', 'verify']
    MANAGER_ACTIONS = ['update', 'partial_update', 'set_active', 'set_inactive', 'preview']

    def has_permission(self, request, view):
        user_role = getattr(request.user, 'role', None)

        if view.action in self.ADMIN_ACTIONS:
            return user_role == UserRoles.ADMIN

        if view.action in self.MANAGER_ACTIONS:
            return request.user.is_manager

        return request.method in permissions.SAFE_METHODS
