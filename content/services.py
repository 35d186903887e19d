import logging

from .models import SiteSetting, TeamMember, Testimonial
from .site_config import decode_setting, default_value, encode_setting

logger = logging.getLogger(__name__)

TEAM_MEMBER_FIELDS = ['name', 'position', 'bio', 'image_url', 'email', 'linkedin_url', 'sort_order', 'active']
TESTIMONIAL_FIELDS = ['client_name', 'client_position', 'testimonial_text', 'rating', 'project_id', 'active']


class _CrudService:
    """Shared create/update/delete for the content tables."""
    model = None

    @classmethod
    def create(cls, **fields):
        return cls.model.objects.create(**fields)

    @classmethod
    def update(cls, pk, **fields):
        instance = cls.model.objects.get(pk=pk)
        for name, value in fields.items():
            setattr(instance, name, value)
        instance.save()
        return instance

    @classmethod
    def delete(cls, pk):
        cls.model.objects.filter(pk=pk).delete()


class TeamMemberService(_CrudService):
    model = TeamMember

    @staticmethod
    def get_all(include_inactive=False):
        """
        Public reads only see active members; the dashboard passes
        include_inactive=True.
        """
        manager = TeamMember.objects if include_inactive else TeamMember.public
        return list(manager.order_by('sort_order', 'id'))


class TestimonialService(_CrudService):
    model = Testimonial

    @staticmethod
    def get_all(include_inactive=False):
        manager = Testimonial.objects if include_inactive else Testimonial.public
        return list(manager.select_related('project').order_by('-created_at'))


class SiteSettingService:
    """Key/value rows. Values go in and out as opaque JSON."""

    @staticmethod
    def get(key):
        row = SiteSetting.objects.filter(setting_key=key).only('setting_value').first()
        return row.setting_value if row else None

    @staticmethod
    def get_many(keys):
        """All requested keys in one read; missing keys are absent from the result."""
        rows = SiteSetting.objects.filter(setting_key__in=list(keys))
        return {row.setting_key: row.setting_value for row in rows}

    @staticmethod
    def set(key, value):
        SiteSetting.objects.update_or_create(
            setting_key=key,
            defaults={'setting_value': value},
        )
        logger.info("Site setting %s saved", key)


def get_site_setting(key):
    """Decoded value for the public pages, falling back to the built-in default."""
    value = decode_setting(key, SiteSettingService.get(key))
    return value if value is not None else default_value(key)


def save_site_setting(key, value):
    SiteSettingService.set(key, encode_setting(key, value))
