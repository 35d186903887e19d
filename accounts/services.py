import logging

from django.contrib.auth import authenticate as django_authenticate

from .models import AdminUser, default_permissions

logger = logging.getLogger(__name__)


class AdminUserService:
    """Data access for back-office operators."""

    @staticmethod
    def get_all():
        """Active admins, newest first."""
        return list(AdminUser.objects.active().order_by('-created_at'))

    @staticmethod
    def get_by_id(pk):
        return AdminUser.objects.filter(pk=pk).first()

    @staticmethod
    def authenticate(username, password, request=None):
        """
        Returns the matching active admin or None. A successful match stamps
        last_login.
        """
        user = django_authenticate(request, username=username, password=password)
        if user is None or not user.is_active:
            logger.info("Rejected admin login for %s", username)
            return None
        user.touch_last_login()
        return user

    @staticmethod
    def create(username, password, role=AdminUser.ROLE_ADMIN, permissions=None, is_active=True):
        return AdminUser.objects.create_user(
            username=username,
            password=password,
            role=role,
            permissions=permissions if permissions is not None else default_permissions(role),
            is_active=is_active,
        )

    @staticmethod
    def update(pk, **fields):
        user = AdminUser.objects.get(pk=pk)
        password = fields.pop('password', None)
        for name, value in fields.items():
            setattr(user, name, value)
        if password:
            user.set_password(password)
        user.save()
        return user

    @staticmethod
    def delete(pk):
        AdminUser.objects.filter(pk=pk).delete()
