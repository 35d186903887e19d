import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient
from unittest.mock import MagicMock


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def super_admin_user(db):
    from accounts.models import AdminUser

    return AdminUser.objects.create_user(
        username='owner',
        password='testpass123',
        role=AdminUser.ROLE_SUPER_ADMIN,
    )


@pytest.fixture
def read_only_admin(db):
    """Signed-in back-office user who may look but not touch"""
    from accounts.models import AdminUser

    return AdminUser.objects.create_user(
        username='assistant',
        password='testpass123',
        role=AdminUser.ROLE_ADMIN,
    )


@pytest.fixture
def authenticated_super_admin(api_client, super_admin_user):
    api_client.force_authenticate(user=super_admin_user)
    return api_client


@pytest.fixture
def authenticated_admin(api_client, read_only_admin):
    api_client.force_authenticate(user=read_only_admin)
    return api_client


@pytest.fixture
def super_admin_client(client, super_admin_user):
    """Django test client with a dashboard session"""
    client.force_login(super_admin_user)
    return client


@pytest.fixture
def read_only_client(client, read_only_admin):
    client.force_login(read_only_admin)
    return client


@pytest.fixture
def project(db):
    from projects.models import Project

    return Project.objects.create(
        title='Harbor House',
        category='Residential',
        location='Brooklyn, NY',
        year='2023',
        description='A waterfront family home.',
        main_image='/media/uploads/harbor-main.jpg',
        featured=True,
    )


@pytest.fixture
def project_with_images(project):
    from projects.models import ProjectImage

    for position, name in enumerate(['harbor-1.jpg', 'harbor-2.jpg']):
        ProjectImage.objects.create(
            project=project,
            image_url=f'/media/uploads/{name}',
            alt_text=f'{project.title} - Image {position + 2}',
            sort_order=position + 1,
        )
    return project


@pytest.fixture
def team_members(db):
    """One visible and one hidden member"""
    from content.models import TeamMember

    visible = TeamMember.objects.create(name='Ana Silva', position='Principal Architect', sort_order=1)
    hidden = TeamMember.objects.create(name='Ben Ortiz', position='Intern', sort_order=2, active=False)
    return visible, hidden


@pytest.fixture
def testimonials(db, project):
    from content.models import Testimonial

    visible = Testimonial.objects.create(
        client_name='Maya Chen',
        client_position='Homeowner',
        testimonial_text='They turned our house into a home.',
        rating=5,
        project=project,
    )
    hidden = Testimonial.objects.create(
        client_name='Old Client',
        testimonial_text='Retired quote.',
        rating=4,
        active=False,
    )
    return visible, hidden


@pytest.fixture
def fake_gateways():
    """Panel gateways that record calls instead of touching the database or storage"""
    from dashboard.panel import Gateways

    gateways = Gateways(
        projects=MagicMock(),
        project_images=MagicMock(),
        team_members=MagicMock(),
        testimonials=MagicMock(),
        site_settings=MagicMock(),
        storage=MagicMock(),
    )
    gateways.projects.get_all.return_value = []
    gateways.team_members.get_all.return_value = []
    gateways.testimonials.get_all.return_value = []
    gateways.site_settings.get_many.return_value = {}
    return gateways


def _png_bytes():
    buffer = io.BytesIO()
    Image.new('RGB', (4, 4), color=(200, 120, 40)).save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def image_upload():
    return SimpleUploadedFile('photo.png', _png_bytes(), content_type='image/png')
