from rest_framework import generics

from .models import Project
from .serializers import ProjectSerializer
from .services import ProjectService


class ProjectListView(generics.ListCreateAPIView):
    """Public listing; super admins may create."""
    serializer_class = ProjectSerializer
    filterset_fields = ['featured', 'category']
    pagination_class = None

    def get_queryset(self):
        return Project.objects.prefetch_related('project_images').order_by('-created_at')


class ProjectDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = ProjectSerializer

    def get_queryset(self):
        return Project.objects.prefetch_related('project_images')

    def perform_destroy(self, instance):
        ProjectService.delete(instance.pk)
