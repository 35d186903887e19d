# tests/integration/test_admin_flow.py
"""
End-to-end integration tests:
- Super admin signs in, builds content in the dashboard, public pages show it
- Read-only admin signs in, sees everything, changes nothing
- API token login followed by an authenticated write
"""

import pytest
from django.urls import reverse
from rest_framework import status

from content.models import SiteSetting, TeamMember
from projects.models import Project


@pytest.mark.django_db
class TestSuperAdminJourney:
    """
    1. Login
    2. Create a project with an uploaded main image
    3. Add a hidden team member
    4. Save stats
    5. Check the public site
    """

    def test_full_content_journey(self, client, super_admin_user, image_upload):
        response = client.post(reverse('dashboard:login'), {'username': 'owner', 'password': 'testpass123'})
        assert response.status_code == 302

        client.get(reverse('dashboard:index'))

        client.post(reverse('dashboard:project_new'))
        client.post(reverse('dashboard:project_form'), {
            'title': 'Rooftop Garden',
            'category': 'Mixed-Use',
            'featured': 'true',
            'action': 'upload_main',
            'main_image_file': image_upload,
        })
        client.post(reverse('dashboard:project_form'), {
            'title': 'Rooftop Garden',
            'category': 'Mixed-Use',
            'featured': 'true',
            'action': 'save',
        })

        project = Project.objects.get()
        assert project.main_image.startswith('/media/uploads/')
        assert project.featured is True

        client.post(reverse('dashboard:team_new'))
        client.post(reverse('dashboard:team_form'), {
            'name': 'Hidden Partner', 'position': 'Partner', 'action': 'save',
        })
        assert TeamMember.objects.get().active is False

        client.post(reverse('dashboard:settings'), {'projectsCompleted': '512', 'action': 'save'})

        home = client.get(reverse('landing:home'))
        assert b'Rooftop Garden' in home.content
        assert b'512+' in home.content

        detail = client.get(reverse('landing:project_detail', args=[project.pk]))
        assert detail.context['gallery'] == [project.main_image]

        team = client.get(reverse('landing:team'))
        assert b'Hidden Partner' not in team.content


@pytest.mark.django_db
class TestReadOnlyAdminJourney:

    def test_read_only_admin_changes_nothing(self, client, read_only_admin, project, team_members):
        client.post(reverse('dashboard:login'), {'username': 'assistant', 'password': 'testpass123'})

        panel = client.get(reverse('dashboard:index'), {'tab': 'team'})
        assert panel.status_code == 200
        assert b'Ben Ortiz' in panel.content

        client.post(reverse('dashboard:project_delete', args=[project.pk]))
        client.post(reverse('dashboard:project_edit', args=[project.pk]))
        client.post(reverse('dashboard:project_form'), {
            'title': 'Defaced', 'main_image': project.main_image, 'action': 'save',
        })
        client.post(reverse('dashboard:settings'), {'successRate': '1', 'action': 'save'})

        project.refresh_from_db()
        assert project.title == 'Harbor House'
        assert Project.objects.count() == 1
        assert not SiteSetting.objects.exists()


@pytest.mark.django_db
class TestApiTokenFlow:

    def test_token_login_then_write(self, api_client, super_admin_user):
        login = api_client.post(
            reverse('accounts:login'),
            {'username': 'owner', 'password': 'testpass123'},
            format='json',
        )
        assert login.status_code == status.HTTP_200_OK

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = api_client.post(reverse('team-list'), {
            'name': 'Via API', 'position': 'Designer', 'image_url': '/media/api.jpg',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_refresh_token(self, api_client, super_admin_user):
        login = api_client.post(
            reverse('accounts:login'),
            {'username': 'owner', 'password': 'testpass123'},
            format='json',
        )

        response = api_client.post(reverse('accounts:token-refresh'), {'refresh': login.data['refresh']}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
