import logging

from django.db.models import Prefetch

from .models import Project, ProjectImage

logger = logging.getLogger(__name__)

# Scalar columns the dashboard form and the API are allowed to write
PROJECT_FIELDS = [
    'title', 'category', 'location', 'year', 'description', 'details',
    'client', 'area', 'duration', 'featured', 'main_image',
]


def _with_images(queryset):
    return queryset.prefetch_related(
        Prefetch('project_images', queryset=ProjectImage.objects.order_by('sort_order', 'id'))
    )


class ProjectService:
    """Projects table, newest first, each row carrying its project_images."""

    @staticmethod
    def get_all():
        return list(_with_images(Project.objects.order_by('-created_at')))

    @staticmethod
    def get_by_id(pk):
        return _with_images(Project.objects.filter(pk=pk)).first()

    @staticmethod
    def get_featured():
        return list(_with_images(Project.objects.filter(featured=True).order_by('-created_at')))

    @staticmethod
    def create(**fields):
        return Project.objects.create(**fields)

    @staticmethod
    def update(pk, **fields):
        project = Project.objects.get(pk=pk)
        for name, value in fields.items():
            setattr(project, name, value)
        project.save()
        return project

    @staticmethod
    def delete(pk):
        Project.objects.filter(pk=pk).delete()


class ProjectImageService:

    @staticmethod
    def create(project_id, image_url, alt_text='', sort_order=0):
        return ProjectImage.objects.create(
            project_id=project_id,
            image_url=image_url,
            alt_text=alt_text,
            sort_order=sort_order,
        )

    @staticmethod
    def delete(pk):
        ProjectImage.objects.filter(pk=pk).delete()


def image_alt_text(title, position):
    # Position 0 of the gallery is the main image, hence the +2
    return f"{title} - Image {position + 2}"


def sync_project(fields, additional_images, project_id=None, previous_image_ids=(),
                 projects=ProjectService, project_images=ProjectImageService):
    """
    Save a project and replace its additional images.

    The image set is recreated, never diffed: every image attached at the
    last load is deleted one call at a time, the scalar fields are written,
    then one row is inserted per URL in `additional_images` order.

    Nothing here runs in a transaction. The first failing call raises and the
    remaining calls are not attempted, so a failure part way through leaves
    whatever was already written; the next reload shows the real state.
    """
    if project_id is not None:
        for image_id in previous_image_ids:
            project_images.delete(image_id)
        project = projects.update(project_id, **fields)
    else:
        project = projects.create(**fields)

    for position, image_url in enumerate(additional_images):
        project_images.create(
            project_id=project.pk,
            image_url=image_url,
            alt_text=image_alt_text(project.title, position),
            sort_order=position + 1,
        )

    logger.info(
        "Saved project %s with %d additional images (%d replaced)",
        project.pk, len(additional_images), len(previous_image_ids),
    )
    return project


def compose_gallery(project):
    """Main image followed by the additional images, first occurrence wins."""
    urls = [project.main_image] + [img.image_url for img in project.project_images.all()]
    gallery = []
    for url in urls:
        if url and url not in gallery:
            gallery.append(url)
    return gallery


def related_projects(project, all_projects, limit=3):
    return [
        other for other in all_projects
        if other.pk != project.pk and other.category == project.category
    ][:limit]
