# accounts/permissions.py
from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import AdminUser


def is_super_admin(user):
    return bool(
        user
        and user.is_authenticated
        and user.is_active
        and getattr(user, 'role', None) == AdminUser.ROLE_SUPER_ADMIN
    )


class IsSuperAdmin(BasePermission):
    message = 'Only super admins can perform this action.'

    def has_permission(self, request, view):
        return is_super_admin(request.user)


class IsSuperAdminOrReadOnly(BasePermission):
    """Anyone may read; only a super admin may write."""
    message = 'Only super admins can modify site content.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_super_admin(request.user)


class IsOperator(BasePermission):
    """Any signed-in back-office user, read-only or not."""

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_active)
