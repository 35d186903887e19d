import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, call
from django.urls import reverse
from rest_framework import status

from projects.models import Project, ProjectImage
from projects.services import (
    ProjectService, compose_gallery, image_alt_text, related_projects, sync_project,
)


def _recorder(project_pk=7, title='Loft'):
    """Project and image gateways sharing one call log, so call order can be asserted."""
    log = MagicMock()
    saved = SimpleNamespace(pk=project_pk, title=title)
    log.projects.create.return_value = saved
    log.projects.update.return_value = saved
    return log


# ============================================
# SYNC TESTS
# ============================================

class TestSyncProject:
    """sync_project against recording gateways"""

    def test_create_inserts_one_row_per_url(self):
        log = _recorder()

        sync_project({'title': 'Loft'}, ['a.jpg', 'b.jpg', 'c.jpg'],
                     projects=log.projects, project_images=log.images)

        log.projects.create.assert_called_once_with(title='Loft')
        assert log.images.delete.call_count == 0
        assert log.images.create.call_args_list == [
            call(project_id=7, image_url='a.jpg', alt_text='Loft - Image 2', sort_order=1),
            call(project_id=7, image_url='b.jpg', alt_text='Loft - Image 3', sort_order=2),
            call(project_id=7, image_url='c.jpg', alt_text='Loft - Image 4', sort_order=3),
        ]

    def test_edit_deletes_every_previous_image_then_recreates(self):
        log = _recorder()

        sync_project({'title': 'Loft'}, ['x.jpg', 'y.jpg'], project_id=7, previous_image_ids=[11, 12, 13],
                     projects=log.projects, project_images=log.images)

        assert log.mock_calls == [
            call.images.delete(11),
            call.images.delete(12),
            call.images.delete(13),
            call.projects.update(7, title='Loft'),
            call.images.create(project_id=7, image_url='x.jpg', alt_text='Loft - Image 2', sort_order=1),
            call.images.create(project_id=7, image_url='y.jpg', alt_text='Loft - Image 3', sort_order=2),
        ]

    def test_edit_with_no_images_left(self):
        log = _recorder()

        sync_project({'title': 'Loft'}, [], project_id=7, previous_image_ids=[1, 2],
                     projects=log.projects, project_images=log.images)

        assert log.images.delete.call_count == 2
        assert log.images.create.call_count == 0

    def test_first_failure_stops_the_remaining_calls(self):
        log = _recorder()
        log.images.create.side_effect = [None, RuntimeError('insert failed'), None]

        with pytest.raises(RuntimeError):
            sync_project({'title': 'Loft'}, ['a.jpg', 'b.jpg', 'c.jpg'],
                         projects=log.projects, project_images=log.images)

        assert log.images.create.call_count == 2

    def test_failed_delete_skips_update(self):
        log = _recorder()
        log.images.delete.side_effect = RuntimeError('delete failed')

        with pytest.raises(RuntimeError):
            sync_project({'title': 'Loft'}, ['a.jpg'], project_id=7, previous_image_ids=[1, 2],
                         projects=log.projects, project_images=log.images)

        log.projects.update.assert_not_called()
        log.images.create.assert_not_called()

    def test_alt_text(self):
        assert image_alt_text('Loft', 0) == 'Loft - Image 2'
        assert image_alt_text('Loft', 4) == 'Loft - Image 6'


@pytest.mark.django_db
class TestSyncProjectDatabase:

    def test_edit_replaces_image_rows(self, project_with_images):
        old_ids = list(project_with_images.project_images.values_list('id', flat=True))

        sync_project(
            {'title': 'Harbor House II'},
            ['/media/uploads/new.jpg'],
            project_id=project_with_images.pk,
            previous_image_ids=old_ids,
        )

        project = ProjectService.get_by_id(project_with_images.pk)
        images = list(project.project_images.all())
        assert project.title == 'Harbor House II'
        assert [img.image_url for img in images] == ['/media/uploads/new.jpg']
        assert images[0].sort_order == 1
        assert not ProjectImage.objects.filter(id__in=old_ids).exists()


# ============================================
# COMPOSER TESTS
# ============================================

def _project(pk, main_image='', images=(), category='Residential'):
    rows = [SimpleNamespace(image_url=url) for url in images]
    return SimpleNamespace(
        pk=pk,
        main_image=main_image,
        category=category,
        project_images=SimpleNamespace(all=lambda: rows),
    )


class TestComposeGallery:

    def test_main_image_first_then_additional(self):
        project = _project(1, 'main.jpg', ['a.jpg', 'b.jpg'])

        assert compose_gallery(project) == ['main.jpg', 'a.jpg', 'b.jpg']

    def test_duplicates_removed_first_occurrence_wins(self):
        project = _project(1, 'a.jpg', ['b.jpg', 'a.jpg', 'b.jpg', 'c.jpg'])

        assert compose_gallery(project) == ['a.jpg', 'b.jpg', 'c.jpg']

    def test_empty_urls_skipped(self):
        project = _project(1, '', ['', 'a.jpg'])

        assert compose_gallery(project) == ['a.jpg']


class TestRelatedProjects:

    def test_same_category_excluding_self_capped(self):
        current = _project(1)
        others = [current] + [_project(pk) for pk in range(2, 7)] + [_project(9, category='Commercial')]

        related = related_projects(current, others)

        assert [p.pk for p in related] == [2, 3, 4]

    def test_no_matches(self):
        current = _project(1)

        assert related_projects(current, [current, _project(2, category='Hospitality')]) == []


# ============================================
# SERVICE TESTS
# ============================================

@pytest.mark.django_db
class TestProjectService:

    def test_get_all_newest_first(self, project):
        newer = Project.objects.create(title='Newer', main_image='/media/n.jpg')

        assert [p.pk for p in ProjectService.get_all()] == [newer.pk, project.pk]

    def test_get_by_id_missing(self, db):
        assert ProjectService.get_by_id(999) is None

    def test_get_featured(self, project):
        Project.objects.create(title='Plain', main_image='/media/p.jpg', featured=False)

        assert [p.pk for p in ProjectService.get_featured()] == [project.pk]

    def test_delete_cascades_images(self, project_with_images):
        ProjectService.delete(project_with_images.pk)

        assert not ProjectImage.objects.exists()


# ============================================
# API TESTS
# ============================================

@pytest.mark.django_db
class TestProjectAPI:

    def test_public_list(self, api_client, project_with_images):
        response = api_client.get(reverse('project-list'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['gallery'] == [
            '/media/uploads/harbor-main.jpg',
            '/media/uploads/harbor-1.jpg',
            '/media/uploads/harbor-2.jpg',
        ]

    def test_filter_by_category(self, api_client, project):
        Project.objects.create(title='Office', category='Commercial', main_image='/media/o.jpg')

        response = api_client.get(reverse('project-list'), {'category': 'Commercial'})

        assert [p['title'] for p in response.data] == ['Office']

    def test_anonymous_cannot_create(self, api_client):
        response = api_client.post(reverse('project-list'), {'title': 'X', 'main_image': '/m.jpg'}, format='json')

        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
        assert not Project.objects.exists()

    def test_read_only_admin_cannot_create(self, authenticated_admin):
        response = authenticated_admin.post(reverse('project-list'), {'title': 'X', 'main_image': '/m.jpg'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not Project.objects.exists()

    def test_super_admin_creates_with_images(self, authenticated_super_admin):
        response = authenticated_super_admin.post(reverse('project-list'), {
            'title': 'Sky Villa',
            'category': 'Residential',
            'main_image': '/media/uploads/sky.jpg',
            'additional_images': ['/media/uploads/sky-1.jpg', '/media/uploads/sky-2.jpg'],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        project = Project.objects.get(title='Sky Villa')
        assert [(img.image_url, img.sort_order) for img in project.project_images.all()] == [
            ('/media/uploads/sky-1.jpg', 1),
            ('/media/uploads/sky-2.jpg', 2),
        ]

    def test_main_image_required(self, authenticated_super_admin):
        response = authenticated_super_admin.post(reverse('project-list'), {'title': 'No Cover', 'main_image': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False

    def test_main_image_missing_from_payload(self, authenticated_super_admin):
        response = authenticated_super_admin.post(reverse('project-list'), {'title': 'No Cover'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Project.objects.filter(title='No Cover').exists()

    def test_patch_without_images_keeps_them(self, authenticated_super_admin, project_with_images):
        response = authenticated_super_admin.patch(
            reverse('project-detail', args=[project_with_images.pk]),
            {'title': 'Renamed'},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        project = ProjectService.get_by_id(project_with_images.pk)
        assert project.title == 'Renamed'
        assert [img.image_url for img in project.project_images.all()] == [
            '/media/uploads/harbor-1.jpg',
            '/media/uploads/harbor-2.jpg',
        ]

    def test_delete(self, authenticated_super_admin, project):
        response = authenticated_super_admin.delete(reverse('project-detail', args=[project.pk]))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Project.objects.exists()
