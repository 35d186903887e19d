import pytest
from django.urls import reverse

from content.services import SiteSettingService
from content.site_config import CONTACT_INFO, HERO_SLIDES
from projects.models import Project


@pytest.mark.django_db
class TestLandingPages:
    """Public pages render from the public tier"""

    @pytest.mark.parametrize('name', ['landing:home', 'landing:projects', 'landing:team', 'landing:contact'])
    def test_pages_load(self, client, name):
        response = client.get(reverse(name))

        assert response.status_code == 200

    def test_home_shows_featured_and_active_testimonials(self, client, testimonials):
        response = client.get(reverse('landing:home'))

        assert b'Harbor House' in response.content
        assert b'They turned our house into a home.' in response.content
        assert b'Retired quote.' not in response.content

    def test_home_uses_stored_hero_slides(self, client, db):
        SiteSettingService.set(HERO_SLIDES, [{'image': '/media/h.jpg', 'title': 'Spaces That Inspire', 'subtitle': ''}])

        response = client.get(reverse('landing:home'))

        assert b'Spaces That Inspire' in response.content

    def test_footer_falls_back_to_default_contact(self, client, db):
        response = client.get(reverse('landing:contact'))

        assert b'info@26asdesign.com' in response.content

    def test_footer_uses_stored_contact(self, client, db):
        SiteSettingService.set(CONTACT_INFO, {'address': '1 Main St', 'phone': '555', 'email': 'hello@studio.test'})

        response = client.get(reverse('landing:contact'))

        assert b'hello@studio.test' in response.content

    def test_team_hides_inactive(self, client, team_members):
        response = client.get(reverse('landing:team'))

        assert b'Ana Silva' in response.content
        assert b'Ben Ortiz' not in response.content

    def test_category_filter(self, client, project):
        Project.objects.create(title='Corner Office', category='Commercial', main_image='/media/o.jpg')

        response = client.get(reverse('landing:projects'), {'category': 'Commercial'})

        assert b'Corner Office' in response.content
        assert b'Harbor House' not in response.content


@pytest.mark.django_db
class TestProjectDetail:

    def test_gallery_and_related(self, client, project_with_images):
        related = Project.objects.create(title='Lake Cabin', category='Residential', main_image='/media/l.jpg')
        Project.objects.create(title='Tower Lobby', category='Commercial', main_image='/media/t.jpg')

        response = client.get(reverse('landing:project_detail', args=[project_with_images.pk]))

        assert response.status_code == 200
        assert response.context['gallery'] == [
            '/media/uploads/harbor-main.jpg',
            '/media/uploads/harbor-1.jpg',
            '/media/uploads/harbor-2.jpg',
        ]
        assert [p.pk for p in response.context['related']] == [related.pk]

    def test_missing_project_is_404(self, client, db):
        response = client.get(reverse('landing:project_detail', args=[999]))

        assert response.status_code == 404
