"""
Shapes of the values stored under the four site-setting keys.

`SiteSetting.setting_value` is opaque JSON to the database; this module is the
only place that knows what each key holds. Values read from the table are
decoded here and anything that does not fit the shape for its key is treated
as missing.
"""
import copy
import logging
import re

from rest_framework import serializers

logger = logging.getLogger(__name__)

STATS = 'stats'
CONTACT_INFO = 'contact_info'
SOCIAL_LINKS = 'social_links'
HERO_SLIDES = 'hero_slides'

SETTING_KEYS = (STATS, CONTACT_INFO, SOCIAL_LINKS, HERO_SLIDES)

STAT_FIELDS = ('projectsCompleted', 'yearsExperience', 'happyClients', 'successRate')
CONTACT_FIELDS = ('address', 'phone', 'email')
SOCIAL_FIELDS = ('facebook', 'instagram', 'twitter', 'youtube', 'behance')
HERO_SLIDE_FIELDS = ('image', 'title', 'subtitle')

DEFAULTS = {
    STATS: {
        'projectsCompleted': 150,
        'yearsExperience': 12,
        'happyClients': 200,
        'successRate': 95,
    },
    CONTACT_INFO: {
        'address': '123 Design Street, Suite 456, New York, NY 10001',
        'phone': '+1 (555) 123-4567',
        'email': 'info@26asdesign.com',
    },
    SOCIAL_LINKS: {
        'facebook': 'https://facebook.com/26asdesign',
        'instagram': 'https://instagram.com/26asdesign',
        'twitter': 'https://twitter.com/26asdesign',
        'youtube': 'https://youtube.com/@26asdesign',
        'behance': 'https://behance.net/26asdesign',
    },
    HERO_SLIDES: [],
}


class StatsSerializer(serializers.Serializer):
    projectsCompleted = serializers.IntegerField(default=0)
    yearsExperience = serializers.IntegerField(default=0)
    happyClients = serializers.IntegerField(default=0)
    successRate = serializers.IntegerField(default=0)


class ContactInfoSerializer(serializers.Serializer):
    address = serializers.CharField(allow_blank=True, default='')
    phone = serializers.CharField(allow_blank=True, default='')
    email = serializers.CharField(allow_blank=True, default='')


class SocialLinksSerializer(serializers.Serializer):
    facebook = serializers.CharField(allow_blank=True, default='')
    instagram = serializers.CharField(allow_blank=True, default='')
    twitter = serializers.CharField(allow_blank=True, default='')
    youtube = serializers.CharField(allow_blank=True, default='')
    behance = serializers.CharField(allow_blank=True, default='')


class HeroSlideSerializer(serializers.Serializer):
    image = serializers.CharField(allow_blank=True, default='')
    title = serializers.CharField(allow_blank=True, default='')
    subtitle = serializers.CharField(allow_blank=True, default='')


SCHEMAS = {
    STATS: (StatsSerializer, False),
    CONTACT_INFO: (ContactInfoSerializer, False),
    SOCIAL_LINKS: (SocialLinksSerializer, False),
    HERO_SLIDES: (HeroSlideSerializer, True),
}


class InvalidSettingValue(ValueError):
    pass


def default_value(key):
    return copy.deepcopy(DEFAULTS[key])


def _validate(key, raw):
    serializer_class, many = SCHEMAS[key]
    serializer = serializer_class(data=raw, many=many)
    if not serializer.is_valid():
        raise InvalidSettingValue(f"{key}: {serializer.errors}")
    if many:
        return [dict(item) for item in serializer.validated_data]
    return dict(serializer.validated_data)


def decode_setting(key, raw):
    """
    Stored value -> shaped value, or None when the key is unknown, the row is
    missing, or the value does not fit the shape.
    """
    if key not in SCHEMAS or raw is None:
        return None
    try:
        return _validate(key, raw)
    except InvalidSettingValue as exc:
        logger.warning("Ignoring stored site setting %s", exc)
        return None


def encode_setting(key, value):
    """Shaped value -> JSON to store. Raises InvalidSettingValue."""
    if key not in SCHEMAS:
        raise InvalidSettingValue(f"Unknown site setting '{key}'")
    return _validate(key, value)


_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_int(raw, default=0):
    """
    Integer prefix of the input, `default` when there is none: '42' -> 42,
    '12abc' -> 12, 'abc' -> 0.
    """
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw if raw is not None else ''))
    return int(match.group(1)) if match else default
