import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.urls import reverse
from rest_framework import serializers, status

from accounts.models import AdminUser, CAPABILITIES
from accounts.permissions import is_super_admin
from accounts.serializers import AdminUserSerializer
from accounts.services import AdminUserService


# ============================================
# ADMIN USER MODEL TESTS
# ============================================

@pytest.mark.django_db
class TestAdminUserModel:
    """Test AdminUser creation and roles"""

    def test_create_admin_defaults_to_read_only(self):
        user = AdminUser.objects.create_user(username='viewer', password='securepass123')

        assert user.role == AdminUser.ROLE_ADMIN
        assert user.is_super_admin is False
        assert user.check_password('securepass123')
        assert user.permissions == {capability: False for capability in CAPABILITIES}

    def test_create_super_admin(self):
        user = AdminUser.objects.create_user(
            username='boss', password='securepass123', role=AdminUser.ROLE_SUPER_ADMIN,
        )

        assert user.is_super_admin is True
        assert all(user.permissions.values())

    def test_create_superuser_is_super_admin(self):
        user = AdminUser.objects.create_superuser(username='root', password='securepass123')

        assert user.is_superuser is True
        assert user.role == AdminUser.ROLE_SUPER_ADMIN

    def test_username_is_required(self):
        with pytest.raises(ValueError, match='Username is required'):
            AdminUser.objects.create_user(username='', password='test')

    def test_as_operator(self, super_admin_user):
        operator = super_admin_user.as_operator()

        assert operator['id'] == super_admin_user.pk
        assert operator['username'] == 'owner'
        assert operator['role'] == 'super_admin'
        assert 'password' not in operator


# ============================================
# SERVICE TESTS
# ============================================

@pytest.mark.django_db
class TestAdminUserService:

    def test_authenticate_success_stamps_last_login(self, super_admin_user):
        assert super_admin_user.last_login is None

        user = AdminUserService.authenticate('owner', 'testpass123')

        assert user == super_admin_user
        user.refresh_from_db()
        assert user.last_login is not None

    def test_authenticate_wrong_password(self, super_admin_user):
        assert AdminUserService.authenticate('owner', 'wrong') is None

    def test_authenticate_inactive_user(self, super_admin_user):
        super_admin_user.is_active = False
        super_admin_user.save()

        assert AdminUserService.authenticate('owner', 'testpass123') is None

    def test_get_all_skips_inactive(self, super_admin_user, read_only_admin):
        read_only_admin.is_active = False
        read_only_admin.save()

        assert AdminUserService.get_all() == [super_admin_user]

    def test_update_hashes_password(self, read_only_admin):
        AdminUserService.update(read_only_admin.pk, password='newpass456', role=AdminUser.ROLE_SUPER_ADMIN)

        read_only_admin.refresh_from_db()
        assert read_only_admin.check_password('newpass456')
        assert read_only_admin.role == AdminUser.ROLE_SUPER_ADMIN

    def test_delete(self, read_only_admin):
        AdminUserService.delete(read_only_admin.pk)

        assert AdminUserService.get_by_id(read_only_admin.pk) is None


# ============================================
# PERMISSION TESTS
# ============================================

@pytest.mark.django_db
class TestPermissions:

    def test_is_super_admin(self, super_admin_user, read_only_admin):
        assert is_super_admin(super_admin_user) is True
        assert is_super_admin(read_only_admin) is False

    def test_inactive_super_admin_cannot_write(self, super_admin_user):
        super_admin_user.is_active = False

        assert is_super_admin(super_admin_user) is False


# ============================================
# API TESTS
# ============================================

@pytest.mark.django_db
class TestLoginAPI:

    def test_login_returns_tokens_and_operator(self, api_client, super_admin_user):
        response = api_client.post(
            reverse('accounts:login'),
            {'username': 'owner', 'password': 'testpass123'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data
        assert response.data['user']['role'] == 'super_admin'

    def test_login_invalid_credentials(self, api_client, super_admin_user):
        response = api_client.post(
            reverse('accounts:login'),
            {'username': 'owner', 'password': 'nope'},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False

    def test_me_requires_auth(self, api_client):
        response = api_client.get(reverse('accounts:current-user'))

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_me(self, authenticated_admin, read_only_admin):
        response = authenticated_admin.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == read_only_admin.username
        assert response.data['role'] == 'admin'


@pytest.mark.django_db
class TestAdminUserAPI:

    def test_read_only_admin_cannot_list_users(self, authenticated_admin):
        response = authenticated_admin.get(reverse('accounts:admin-user-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_super_admin_creates_user(self, authenticated_super_admin):
        response = authenticated_super_admin.post(
            reverse('accounts:admin-user-list'),
            {'username': 'helper', 'password': 'helperpass1', 'role': 'admin'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert 'password' not in response.data
        assert response.data['can_edit'] is False
        assert AdminUser.objects.get(username='helper').check_password('helperpass1')

    def test_serializer_requires_password_on_create(self):
        serializer = AdminUserSerializer(data={'username': 'nopass', 'role': 'admin'})
        assert serializer.is_valid()

        with pytest.raises(serializers.ValidationError):
            serializer.save()


# ============================================
# MANAGEMENT COMMAND TESTS
# ============================================

@pytest.mark.django_db
class TestCreateAdminUserCommand:

    def test_creates_super_admin_by_default(self):
        call_command('create_admin_user', 'studio', 'studiopass1')

        user = AdminUser.objects.get(username='studio')
        assert user.is_super_admin
        assert user.is_staff

    def test_creates_read_only_admin(self):
        call_command('create_admin_user', 'viewer', 'viewerpass1', '--role', 'admin')

        user = AdminUser.objects.get(username='viewer')
        assert not user.is_super_admin
        assert not user.is_staff

    def test_duplicate_username(self, super_admin_user):
        with pytest.raises(CommandError):
            call_command('create_admin_user', 'owner', 'whatever1')
