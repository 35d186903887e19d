from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.utils import timezone


# Named capabilities shown on the dashboard tabs
CAPABILITIES = ['projects', 'team', 'testimonials', 'hero', 'settings']


def default_permissions(role):
    """Capability map stored with a new admin user."""
    can_write = role == AdminUser.ROLE_SUPER_ADMIN
    return {capability: can_write for capability in CAPABILITIES}


class AdminUserManager(UserManager):
    def create_user(self, username, password=None, role='admin', **extra_fields):
        if not username:
            raise ValueError('Username is required')
        extra_fields.setdefault('permissions', default_permissions(role))
        return super().create_user(username, password=password, role=role, **extra_fields)

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('role', AdminUser.ROLE_SUPER_ADMIN)
        extra_fields.setdefault('permissions', default_permissions(AdminUser.ROLE_SUPER_ADMIN))
        return super().create_superuser(username, password=password, **extra_fields)

    def active(self):
        return self.filter(is_active=True)


class AdminUser(AbstractUser):
    """
    Back-office operator. `role` is the only thing the dashboard looks at
    when deciding whether an action may write.
    """
    ROLE_ADMIN = 'admin'
    ROLE_SUPER_ADMIN = 'super_admin'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin (read only)'),
        (ROLE_SUPER_ADMIN, 'Super admin'),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_ADMIN)
    permissions = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AdminUserManager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'admin user'

    def __str__(self):
        return f"{self.username} ({self.role})"

    @property
    def is_super_admin(self):
        return self.role == self.ROLE_SUPER_ADMIN

    def touch_last_login(self):
        self.last_login = timezone.now()
        self.save(update_fields=['last_login'])

    def as_operator(self):
        """The identity blob kept in the dashboard session."""
        return {
            'id': self.pk,
            'username': self.username,
            'role': self.role,
            'permissions': dict(self.permissions or {}),
        }
