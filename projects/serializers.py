from rest_framework import serializers

from .models import Project, ProjectImage
from .services import PROJECT_FIELDS, compose_gallery, sync_project


class ProjectImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProjectImage
        fields = ['id', 'project', 'image_url', 'alt_text', 'sort_order', 'created_at']


class ProjectSerializer(serializers.ModelSerializer):
    project_images = ProjectImageSerializer(many=True, read_only=True)
    gallery = serializers.SerializerMethodField()
    additional_images = serializers.ListField(
        child=serializers.CharField(max_length=500),
        write_only=True,
        required=False,
    )

    class Meta:
        model = Project
        fields = ['id', *PROJECT_FIELDS, 'project_images', 'gallery', 'additional_images', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'main_image': {
                'required': True,
                'allow_blank': False,
                'error_messages': {
                    'required': 'A main image is required.',
                    'blank': 'A main image is required.',
                },
            },
        }

    def get_gallery(self, obj):
        return compose_gallery(obj)

    def create(self, validated_data):
        images = validated_data.pop('additional_images', [])
        return sync_project(validated_data, images)

    def update(self, instance, validated_data):
        images = validated_data.pop('additional_images', None)
        if images is None:
            # Scalar-only update keeps the current image set
            images = [img.image_url for img in instance.project_images.all()]
        fields = {name: validated_data.get(name, getattr(instance, name)) for name in PROJECT_FIELDS}
        return sync_project(
            fields,
            images,
            project_id=instance.pk,
            previous_image_ids=[img.pk for img in instance.project_images.all()],
        )
