from rest_framework import serializers

from .models import TeamMember, Testimonial
from .site_config import SETTING_KEYS


class TeamMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = TeamMember
        fields = ['id', 'name', 'position', 'bio', 'image_url', 'email', 'linkedin_url', 'sort_order', 'active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class TestimonialSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True, default=None)

    class Meta:
        model = Testimonial
        fields = ['id', 'client_name', 'client_position', 'testimonial_text', 'rating', 'project', 'project_title', 'active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class SiteSettingSerializer(serializers.Serializer):
    setting_key = serializers.ChoiceField(choices=SETTING_KEYS, read_only=True)
    setting_value = serializers.JSONField()
