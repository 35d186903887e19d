import pytest
from types import SimpleNamespace
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from content.models import SiteSetting, TeamMember, Testimonial
from content.site_config import CONTACT_INFO, SETTING_KEYS, STATS, default_value
from dashboard import uploads
from dashboard.panel import ERROR, SUCCESS, AdminPanel
from dashboard.state import PanelState
from dashboard.views import SESSION_KEY
from projects.models import Project, ProjectImage

SUPER_ADMIN = {'id': 1, 'username': 'owner', 'role': 'super_admin', 'permissions': {}}
READ_ONLY = {'id': 2, 'username': 'assistant', 'role': 'admin', 'permissions': {}}


def _project_row(pk=5, title='Loft', image_rows=()):
    images = [SimpleNamespace(pk=img_pk, image_url=url) for img_pk, url in image_rows]
    return SimpleNamespace(
        pk=pk, title=title, category='Residential', location='', year='2024',
        description='', details='', client='', area='', duration='', featured=False,
        main_image='/media/main.jpg',
        project_images=SimpleNamespace(all=lambda: images),
    )


def _messages(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


# ============================================
# GUARD
# ============================================

class TestGuard:

    def test_can_edit_by_role(self, fake_gateways):
        assert AdminPanel(SUPER_ADMIN, gateways=fake_gateways).can_edit() is True
        assert AdminPanel(READ_ONLY, gateways=fake_gateways).can_edit() is False
        assert AdminPanel(None, gateways=fake_gateways).can_edit() is False

    def test_can_edit_reads_user_objects(self, fake_gateways):
        user = SimpleNamespace(role='super_admin')

        assert AdminPanel(user, gateways=fake_gateways).can_edit() is True

    @pytest.mark.parametrize('action, message', [
        (lambda p: p.submit_project(), 'You do not have permission to modify projects.'),
        (lambda p: p.delete_project(5), 'You do not have permission to delete projects.'),
        (lambda p: p.submit_team_member(), 'You do not have permission to modify team members.'),
        (lambda p: p.delete_team_member(5), 'You do not have permission to delete team members.'),
        (lambda p: p.submit_testimonial(), 'You do not have permission to modify testimonials.'),
        (lambda p: p.delete_testimonial(5), 'You do not have permission to delete testimonials.'),
        (lambda p: p.save_site_settings(), 'You do not have permission to update settings.'),
        (lambda p: p.handle_image_upload(object(), 'main'), 'You do not have permission to upload images.'),
    ])
    def test_read_only_writes_make_no_calls(self, fake_gateways, action, message):
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)
        panel.state.project_form['main_image'] = '/media/main.jpg'

        result = action(panel)

        assert not result
        assert fake_gateways.projects.mock_calls == []
        assert fake_gateways.project_images.mock_calls == []
        assert fake_gateways.team_members.mock_calls == []
        assert fake_gateways.testimonials.mock_calls == []
        assert fake_gateways.site_settings.mock_calls == []
        assert fake_gateways.storage.mock_calls == []
        assert panel.notices == [(ERROR, message)]

    def test_read_only_may_edit_drafts(self, fake_gateways):
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)

        panel.update_stat('happyClients', '300')
        panel.add_hero_slide()

        assert panel.state.site_stats['happyClients'] == 300
        assert len(panel.state.hero_slides) == 1
        assert panel.notices == []


# ============================================
# LOADING
# ============================================

class TestLoadData:

    def test_loads_all_lists_including_inactive(self, fake_gateways):
        fake_gateways.projects.get_all.return_value = ['p']
        fake_gateways.team_members.get_all.return_value = ['m']
        fake_gateways.testimonials.get_all.return_value = ['t']
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)

        assert panel.load_data() is True

        assert (panel.projects, panel.team_members, panel.testimonials) == (['p'], ['m'], ['t'])
        fake_gateways.team_members.get_all.assert_called_once_with(include_inactive=True)
        fake_gateways.testimonials.get_all.assert_called_once_with(include_inactive=True)
        assert panel.state.settings_loaded is True

    def test_any_failure_keeps_previous_lists(self, fake_gateways):
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)
        panel.projects = ['old project']
        panel.team_members = ['old member']
        fake_gateways.projects.get_all.return_value = ['new project']
        fake_gateways.testimonials.get_all.side_effect = RuntimeError('denied')

        assert panel.load_data() is False

        assert panel.projects == ['old project']
        assert panel.team_members == ['old member']
        assert panel.load_error == 'Failed to load admin data. Please check your permissions.'

    def test_stored_setting_replaces_its_slice_only(self, fake_gateways):
        stats = {'projectsCompleted': 1, 'yearsExperience': 2, 'happyClients': 3, 'successRate': 4}
        fake_gateways.site_settings.get_many.return_value = {STATS: stats}
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)

        panel.load_site_settings()

        assert panel.state.site_stats == stats
        assert panel.state.contact_info == default_value(CONTACT_INFO)
        fake_gateways.site_settings.get_many.assert_called_once_with(SETTING_KEYS)

    def test_invalid_stored_setting_is_ignored(self, fake_gateways):
        fake_gateways.site_settings.get_many.return_value = {STATS: 'broken'}
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)

        panel.load_site_settings()

        assert panel.state.site_stats == default_value(STATS)

    def test_settings_failure_is_silent(self, fake_gateways):
        fake_gateways.site_settings.get_many.side_effect = RuntimeError('down')
        panel = AdminPanel(READ_ONLY, gateways=fake_gateways)

        assert panel.load_site_settings() is False

        assert panel.notices == []
        assert panel.state.settings_loaded is False


# ============================================
# PROJECT FLOWS
# ============================================

class TestProjectFlows:

    def test_create_project(self, fake_gateways):
        fake_gateways.projects.create.return_value = SimpleNamespace(pk=9, title='Loft')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_project()
        panel.update_project_form({'title': 'Loft', 'featured': 'true'})
        fake_gateways.storage.upload_image.return_value = '/media/main.jpg'
        panel.handle_image_upload(object(), 'main')
        panel.state.project_form['additional_images'] = ['/media/a.jpg']

        assert panel.submit_project() is True

        fields = fake_gateways.projects.create.call_args.kwargs
        assert fields['title'] == 'Loft'
        assert fields['featured'] is True
        fake_gateways.project_images.create.assert_called_once_with(
            project_id=9, image_url='/media/a.jpg', alt_text='Loft - Image 2', sort_order=1,
        )
        assert fake_gateways.projects.get_all.call_count == 1
        assert panel.notices[-1] == (SUCCESS, 'Project created successfully!')
        assert panel.state.show_project_form is False

    def test_edit_project_replaces_images_loaded_at_edit_time(self, fake_gateways):
        fake_gateways.projects.update.return_value = SimpleNamespace(pk=5, title='Loft')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.edit_project(_project_row(image_rows=[(31, '/media/a.jpg'), (32, '/media/b.jpg')]))

        assert panel.state.project_form['additional_images'] == ['/media/a.jpg', '/media/b.jpg']
        panel.remove_additional_image(0)
        panel.submit_project()

        assert [c.args for c in fake_gateways.project_images.delete.call_args_list] == [(31,), (32,)]
        fake_gateways.project_images.create.assert_called_once_with(
            project_id=5, image_url='/media/b.jpg', alt_text='Loft - Image 2', sort_order=1,
        )
        assert panel.notices[-1] == (SUCCESS, 'Project updated successfully!')

    def test_main_image_required(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_project()
        panel.update_project_form({'title': 'No cover'})

        assert panel.submit_project() is False

        assert fake_gateways.projects.mock_calls == []
        assert panel.notices[0].level == ERROR

    def test_failure_keeps_form_open_and_reports(self, fake_gateways):
        fake_gateways.projects.create.side_effect = RuntimeError('insert failed')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_project()
        panel.update_project_form({'title': 'Loft', 'main_image': '/media/main.jpg'})

        assert panel.submit_project() is False

        assert panel.notices == [(ERROR, 'Error saving project. Please try again.')]
        assert panel.state.show_project_form is True
        assert panel.state.project_form['title'] == 'Loft'
        fake_gateways.projects.get_all.assert_not_called()

    def test_delete_project_reloads(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        assert panel.delete_project(5) is True

        fake_gateways.projects.delete.assert_called_once_with(5)
        assert fake_gateways.projects.get_all.call_count == 1
        assert panel.notices == [(SUCCESS, 'Project deleted successfully!')]


# ============================================
# TEAM & TESTIMONIAL FLOWS
# ============================================

class TestContentFlows:

    def test_create_team_member(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_team_member()
        panel.update_team_member_form({'name': 'Ana', 'position': 'Architect', 'sort_order': '3', 'active': 'true'})

        assert panel.submit_team_member() is True

        fake_gateways.team_members.create.assert_called_once()
        fields = fake_gateways.team_members.create.call_args.kwargs
        assert fields['sort_order'] == 3
        assert fields['active'] is True
        assert panel.notices == [(SUCCESS, 'Team member created successfully!')]

    def test_update_team_member(self, fake_gateways):
        member = SimpleNamespace(pk=4, name='Ana', position='Architect', bio='', image_url='',
                                 email='', linkedin_url='', sort_order=1, active=True)
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.edit_team_member(member)
        panel.update_team_member_form({'name': 'Ana', 'position': 'Partner', 'active': 'true'})

        panel.submit_team_member()

        assert fake_gateways.team_members.update.call_args.args == (4,)
        assert fake_gateways.team_members.update.call_args.kwargs['position'] == 'Partner'
        assert panel.notices == [(SUCCESS, 'Team member updated successfully!')]

    def test_team_save_failure(self, fake_gateways):
        fake_gateways.team_members.create.side_effect = RuntimeError('nope')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_team_member()

        assert panel.submit_team_member() is False

        assert panel.notices == [(ERROR, 'Error saving team member. Please try again.')]
        assert panel.state.show_team_form is True

    @pytest.mark.parametrize('raw, expected', [('4', 4), ('9', 5), ('-1', 1), ('0', 1), ('x', 5), ('', 5)])
    def test_testimonial_rating_clamped(self, fake_gateways, raw, expected):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        panel.update_testimonial_form({'rating': raw})

        assert panel.state.testimonial_form['rating'] == expected

    def test_testimonial_without_project(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.new_testimonial()
        panel.update_testimonial_form({'client_name': 'Maya', 'testimonial_text': 'Great', 'project_id': '', 'active': 'on'})

        panel.submit_testimonial()

        fields = fake_gateways.testimonials.create.call_args.kwargs
        assert fields['project_id'] is None
        assert fields['active'] is True
        assert panel.notices == [(SUCCESS, 'Testimonial created successfully!')]


# ============================================
# SETTINGS & UPLOADS
# ============================================

class TestSettingsAndUploads:

    def test_update_stat_takes_integer_prefix(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        panel.update_stat('projectsCompleted', '12abc')
        panel.update_stat('successRate', 'abc')

        assert panel.state.site_stats['projectsCompleted'] == 12
        assert panel.state.site_stats['successRate'] == 0

    def test_unknown_stat_rejected(self, fake_gateways):
        with pytest.raises(KeyError):
            AdminPanel(SUPER_ADMIN, gateways=fake_gateways).update_stat('awards', '3')

    def test_apply_settings_form(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        panel.apply_settings_form({'happyClients': '250', 'phone': '555-0100', 'behance': ''})

        assert panel.state.site_stats['happyClients'] == 250
        assert panel.state.contact_info['phone'] == '555-0100'
        assert panel.state.social_links['behance'] == ''

    def test_hero_slide_list_ops(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.add_hero_slide()
        panel.add_hero_slide()
        panel.update_hero_slide(1, 'title', 'Second')

        panel.remove_hero_slide(0)

        assert panel.state.hero_slides == [{'image': '', 'title': 'Second', 'subtitle': ''}]

    def test_save_writes_all_keys(self, fake_gateways):
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        assert panel.save_site_settings() is True

        saved_keys = [c.args[0] for c in fake_gateways.site_settings.set.call_args_list]
        assert saved_keys == list(SETTING_KEYS)
        assert panel.notices == [(SUCCESS, 'Site settings updated successfully!')]

    def test_save_failure(self, fake_gateways):
        fake_gateways.site_settings.set.side_effect = RuntimeError('down')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        assert panel.save_site_settings() is False

        assert panel.notices == [(ERROR, 'Error saving site settings. Please try again.')]

    @pytest.mark.parametrize('target, check', [
        ('main', lambda s: s.project_form['main_image']),
        ('additional', lambda s: s.project_form['additional_images'][-1]),
        ('team', lambda s: s.team_member_form['image_url']),
    ])
    def test_upload_lands_in_target(self, fake_gateways, target, check):
        fake_gateways.storage.upload_image.return_value = '/media/uploads/new.png'
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        assert panel.handle_image_upload(object(), target) == '/media/uploads/new.png'

        assert check(panel.state) == '/media/uploads/new.png'

    def test_upload_into_hero_slide(self, fake_gateways):
        fake_gateways.storage.upload_image.return_value = '/media/uploads/hero.png'
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)
        panel.add_hero_slide()

        panel.handle_image_upload(object(), 'hero', slide_index=0)

        assert panel.state.hero_slides[0]['image'] == '/media/uploads/hero.png'

    def test_upload_failure(self, fake_gateways):
        fake_gateways.storage.upload_image.side_effect = uploads.InvalidImage('bad')
        panel = AdminPanel(SUPER_ADMIN, gateways=fake_gateways)

        assert panel.handle_image_upload(object(), 'main') is None

        assert panel.notices == [(ERROR, 'Error uploading image. Please try again.')]
        assert panel.state.project_form['main_image'] == ''


class TestPanelState:

    def test_session_round_trip(self):
        state = PanelState(active_tab='team')
        state.hero_slides = [{'image': 'a', 'title': 'b', 'subtitle': 'c'}]

        assert PanelState.from_session(state.to_session()) == state

    def test_garbage_session_starts_fresh(self):
        assert PanelState.from_session('nope') == PanelState()
        assert PanelState.from_session({'unknown': 1}) == PanelState()


class TestUploads:

    def test_upload_and_delete(self, image_upload):
        url = uploads.upload_image(image_upload)

        assert url.startswith('/media/uploads/')
        assert url.endswith('.png')
        assert uploads.delete_image(url) is True

    def test_rejects_unknown_extension(self):
        upload = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')

        with pytest.raises(uploads.InvalidImage):
            uploads.upload_image(upload)

    def test_rejects_non_image_content(self):
        upload = SimpleUploadedFile('fake.png', b'not really a png', content_type='image/png')

        with pytest.raises(uploads.InvalidImage):
            uploads.upload_image(upload)

    def test_rejects_oversized(self, image_upload, settings):
        settings.MAX_UPLOAD_SIZE = 10

        with pytest.raises(uploads.InvalidImage):
            uploads.upload_image(image_upload)

    def test_delete_outside_storage(self):
        assert uploads.delete_image('https://elsewhere.example.com/a.png') is False


# ============================================
# VIEW TESTS
# ============================================

@pytest.mark.django_db
class TestDashboardAuth:

    def test_login_page_renders(self, client):
        response = client.get(reverse('dashboard:login'))

        assert response.status_code == 200

    def test_login_success(self, client, super_admin_user):
        response = client.post(reverse('dashboard:login'), {'username': 'owner', 'password': 'testpass123'})

        assert response.status_code == 302
        assert response.url == reverse('dashboard:index')

    def test_login_failure(self, client, super_admin_user):
        response = client.post(reverse('dashboard:login'), {'username': 'owner', 'password': 'wrong'})

        assert response.status_code == 200
        assert 'Invalid username or password.' in _messages(response)

    def test_signed_in_user_skips_login(self, super_admin_client):
        response = super_admin_client.get(reverse('dashboard:login'))

        assert response.status_code == 302

    def test_panel_requires_login(self, client):
        response = client.get(reverse('dashboard:index'))

        assert response.status_code == 302
        assert reverse('dashboard:login') in response.url

    def test_logout(self, super_admin_client):
        response = super_admin_client.get(reverse('dashboard:logout'))

        assert response.status_code == 302
        assert '_auth_user_id' not in super_admin_client.session


@pytest.mark.django_db
class TestDashboardPanel:

    def test_read_only_badge(self, read_only_client, project):
        response = read_only_client.get(reverse('dashboard:index'))

        assert response.status_code == 200
        assert b'Read Only' in response.content
        assert b'Harbor House' in response.content

    def test_panel_shows_inactive_rows(self, super_admin_client, team_members):
        response = super_admin_client.get(reverse('dashboard:index'), {'tab': 'team'})

        assert b'Ben Ortiz' in response.content

    def test_create_project_through_form(self, super_admin_client):
        super_admin_client.post(reverse('dashboard:project_new'))

        response = super_admin_client.post(reverse('dashboard:project_form'), {
            'title': 'Garden Pavilion',
            'category': 'Hospitality',
            'main_image': '/media/uploads/pavilion.jpg',
            'action': 'save',
        })

        assert response.status_code == 302
        assert Project.objects.get().title == 'Garden Pavilion'
        assert 'Project created successfully!' in _messages(response)

    def test_upload_then_save_additional_images(self, super_admin_client, image_upload):
        super_admin_client.post(reverse('dashboard:project_new'))
        super_admin_client.post(reverse('dashboard:project_form'), {
            'title': 'Studio',
            'main_image': '/media/uploads/studio.jpg',
            'action': 'upload_additional',
            'additional_image_files': image_upload,
        })

        super_admin_client.post(reverse('dashboard:project_form'), {
            'title': 'Studio',
            'main_image': '/media/uploads/studio.jpg',
            'action': 'save',
        })

        image = ProjectImage.objects.get()
        assert image.image_url.startswith('/media/uploads/')
        assert image.alt_text == 'Studio - Image 2'

    def test_edit_project_fills_draft(self, super_admin_client, project_with_images):
        super_admin_client.post(reverse('dashboard:project_edit', args=[project_with_images.pk]))

        state = super_admin_client.session[SESSION_KEY]
        assert state['editing_project']['id'] == project_with_images.pk
        assert len(state['editing_project']['image_ids']) == 2
        assert state['project_form']['title'] == 'Harbor House'

    def test_read_only_save_is_refused(self, read_only_client):
        response = read_only_client.post(reverse('dashboard:project_form'), {
            'title': 'Sneaky',
            'main_image': '/media/uploads/x.jpg',
            'action': 'save',
        })

        assert not Project.objects.exists()
        assert 'You do not have permission to modify projects.' in _messages(response)

    def test_read_only_delete_is_refused(self, read_only_client, project):
        read_only_client.post(reverse('dashboard:project_delete', args=[project.pk]))

        assert Project.objects.filter(pk=project.pk).exists()

    def test_delete_project(self, super_admin_client, project):
        super_admin_client.post(reverse('dashboard:project_delete', args=[project.pk]))

        assert not Project.objects.exists()

    def test_team_member_form(self, super_admin_client):
        super_admin_client.post(reverse('dashboard:team_new'))
        super_admin_client.post(reverse('dashboard:team_form'), {
            'name': 'Ana', 'position': 'Architect', 'sort_order': '2', 'action': 'save',
        })

        member = TeamMember.objects.get()
        assert member.sort_order == 2
        assert member.active is False

    def test_testimonial_form(self, super_admin_client, project):
        super_admin_client.post(reverse('dashboard:testimonial_new'))
        super_admin_client.post(reverse('dashboard:testimonial_form'), {
            'client_name': 'Maya', 'testimonial_text': 'Lovely', 'rating': '4',
            'project_id': str(project.pk), 'active': 'true', 'action': 'save',
        })

        testimonial = Testimonial.objects.get()
        assert testimonial.project == project
        assert testimonial.rating == 4

    def test_save_settings(self, super_admin_client):
        super_admin_client.get(reverse('dashboard:index'))

        super_admin_client.post(reverse('dashboard:settings'), {'happyClients': '321abc', 'action': 'save'})

        assert SiteSetting.objects.count() == len(SETTING_KEYS)
        assert SiteSetting.objects.get(setting_key=STATS).setting_value['happyClients'] == 321

    def test_settings_draft_kept_without_save(self, read_only_client):
        read_only_client.post(reverse('dashboard:settings'), {'happyClients': '5', 'action': 'apply'})

        assert not SiteSetting.objects.exists()
        assert read_only_client.session[SESSION_KEY]['site_stats']['happyClients'] == 5

    def test_hero_slides(self, super_admin_client):
        super_admin_client.post(reverse('dashboard:hero'), {'action': 'add'})
        super_admin_client.post(reverse('dashboard:hero'), {
            'slide-0-title': 'Welcome', 'slide-0-subtitle': 'Design studio', 'action': 'save',
        })

        assert SiteSetting.objects.get(setting_key='hero_slides').setting_value == [
            {'image': '', 'title': 'Welcome', 'subtitle': 'Design studio'},
        ]
