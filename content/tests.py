import pytest
from django.urls import reverse
from rest_framework import status

from content.models import SiteSetting, TeamMember, Testimonial
from content.services import (
    SiteSettingService, TeamMemberService, TestimonialService,
    get_site_setting, save_site_setting,
)
from content.site_config import (
    CONTACT_INFO, HERO_SLIDES, SETTING_KEYS, SOCIAL_LINKS, STATS,
    InvalidSettingValue, decode_setting, default_value, encode_setting, parse_int,
)


# ============================================
# SETTING SHAPES
# ============================================

class TestParseInt:

    @pytest.mark.parametrize('raw, expected', [
        ('42', 42),
        ('  7', 7),
        ('12abc', 12),
        ('-3', -3),
        ('abc', 0),
        ('', 0),
        (None, 0),
        ('4.9', 4),
        (15, 15),
    ])
    def test_integer_prefix_or_zero(self, raw, expected):
        assert parse_int(raw) == expected

    def test_fallback_when_no_integer(self):
        assert parse_int('none', default=5) == 5
        assert parse_int('0', default=5) == 0


class TestDecodeSetting:

    def test_valid_stats(self):
        raw = {'projectsCompleted': 10, 'yearsExperience': 2, 'happyClients': 30, 'successRate': 99}

        assert decode_setting(STATS, raw) == raw

    def test_missing_row(self):
        assert decode_setting(STATS, None) is None

    def test_unknown_key(self):
        assert decode_setting('footer_text', {'a': 1}) is None

    def test_wrong_shape_is_treated_as_missing(self):
        assert decode_setting(STATS, 'not an object') is None
        assert decode_setting(HERO_SLIDES, {'image': 'x'}) is None

    def test_partial_object_filled_with_blanks(self):
        assert decode_setting(CONTACT_INFO, {'phone': '555'}) == {'address': '', 'phone': '555', 'email': ''}

    def test_hero_slides_list(self):
        raw = [{'image': '/media/a.jpg', 'title': 'One', 'subtitle': ''}]

        assert decode_setting(HERO_SLIDES, raw) == raw


class TestEncodeSetting:

    def test_unknown_key_rejected(self):
        with pytest.raises(InvalidSettingValue):
            encode_setting('footer_text', {})

    def test_bad_value_rejected(self):
        with pytest.raises(InvalidSettingValue):
            encode_setting(STATS, {'projectsCompleted': 'many'})

    def test_defaults_are_valid(self):
        for key in SETTING_KEYS:
            assert encode_setting(key, default_value(key)) == default_value(key)

    def test_default_value_is_a_copy(self):
        value = default_value(SOCIAL_LINKS)
        value['facebook'] = 'changed'

        assert default_value(SOCIAL_LINKS)['facebook'] != 'changed'


# ============================================
# SERVICE TESTS
# ============================================

@pytest.mark.django_db
class TestContentServices:

    def test_public_team_hides_inactive(self, team_members):
        visible, hidden = team_members

        assert TeamMemberService.get_all() == [visible]
        assert TeamMemberService.get_all(include_inactive=True) == [visible, hidden]

    def test_public_testimonials_hide_inactive(self, testimonials):
        visible, hidden = testimonials

        assert TestimonialService.get_all() == [visible]
        assert set(TestimonialService.get_all(include_inactive=True)) == {visible, hidden}

    def test_update_and_delete(self, team_members):
        visible, _ = team_members

        TeamMemberService.update(visible.pk, position='Partner')
        assert TeamMember.objects.get(pk=visible.pk).position == 'Partner'

        TeamMemberService.delete(visible.pk)
        assert not TeamMember.objects.filter(pk=visible.pk).exists()

    def test_testimonial_survives_project_delete(self, testimonials, project):
        visible, _ = testimonials

        project.delete()

        visible.refresh_from_db()
        assert visible.project is None

    def test_site_setting_upsert(self, db):
        SiteSettingService.set(STATS, {'projectsCompleted': 1})
        SiteSettingService.set(STATS, {'projectsCompleted': 2})

        assert SiteSetting.objects.count() == 1
        assert SiteSettingService.get(STATS) == {'projectsCompleted': 2}

    def test_get_many_skips_missing_keys(self, db):
        SiteSettingService.set(CONTACT_INFO, {'phone': '1'})

        assert SiteSettingService.get_many(SETTING_KEYS) == {CONTACT_INFO: {'phone': '1'}}

    def test_get_site_setting_falls_back_to_default(self, db):
        assert get_site_setting(STATS) == default_value(STATS)

        SiteSettingService.set(STATS, ['garbage'])
        assert get_site_setting(STATS) == default_value(STATS)

    def test_save_site_setting_validates(self, db):
        with pytest.raises(InvalidSettingValue):
            save_site_setting(STATS, {'successRate': 'high'})

        assert not SiteSetting.objects.exists()


# ============================================
# API TESTS
# ============================================

@pytest.mark.django_db
class TestTeamAPI:

    def test_anonymous_sees_active_only(self, api_client, team_members):
        response = api_client.get(reverse('team-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [m['name'] for m in response.data] == ['Ana Silva']

    def test_read_only_admin_sees_public_tier(self, authenticated_admin, team_members):
        response = authenticated_admin.get(reverse('team-list'))

        assert [m['name'] for m in response.data] == ['Ana Silva']

    def test_super_admin_sees_everything(self, authenticated_super_admin, team_members):
        response = authenticated_super_admin.get(reverse('team-list'))

        assert [m['name'] for m in response.data] == ['Ana Silva', 'Ben Ortiz']

    def test_inactive_member_detail_hidden_from_public(self, api_client, team_members):
        _, hidden = team_members

        response = api_client.get(reverse('team-detail', args=[hidden.pk]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_read_only_admin_cannot_create(self, authenticated_admin):
        response = authenticated_admin.post(reverse('team-list'), {
            'name': 'New', 'position': 'Designer', 'image_url': '/media/n.jpg',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not TeamMember.objects.exists()

    def test_super_admin_creates(self, authenticated_super_admin):
        response = authenticated_super_admin.post(reverse('team-list'), {
            'name': 'New', 'position': 'Designer', 'image_url': '/media/n.jpg',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert TeamMember.objects.get().name == 'New'


@pytest.mark.django_db
class TestTestimonialAPI:

    def test_public_list_includes_project_title(self, api_client, testimonials):
        response = api_client.get(reverse('testimonial-list'))

        assert len(response.data) == 1
        assert response.data[0]['project_title'] == 'Harbor House'

    def test_rating_out_of_range_rejected(self, authenticated_super_admin):
        response = authenticated_super_admin.post(reverse('testimonial-list'), {
            'client_name': 'X', 'testimonial_text': 'Great', 'rating': 6,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Testimonial.objects.exists()


@pytest.mark.django_db
class TestSiteSettingAPI:

    def test_get_default(self, api_client):
        response = api_client.get(reverse('site-setting', args=[CONTACT_INFO]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['setting_value'] == default_value(CONTACT_INFO)

    def test_unknown_key(self, api_client):
        response = api_client.get(reverse('site-setting', args=['footer']))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_read_only_admin_cannot_write(self, authenticated_admin):
        response = authenticated_admin.put(
            reverse('site-setting', args=[STATS]),
            {'setting_value': default_value(STATS)},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not SiteSetting.objects.exists()

    def test_super_admin_writes(self, authenticated_super_admin):
        value = {'projectsCompleted': 1, 'yearsExperience': 2, 'happyClients': 3, 'successRate': 4}

        response = authenticated_super_admin.put(
            reverse('site-setting', args=[STATS]),
            {'setting_value': value},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert SiteSettingService.get(STATS) == value

    def test_invalid_shape(self, authenticated_super_admin):
        response = authenticated_super_admin.put(
            reverse('site-setting', args=[HERO_SLIDES]),
            {'setting_value': {'image': 'x'}},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
