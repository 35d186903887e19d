from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class VisibleManager(models.Manager):
    """What the public site may read: rows switched on by `active`."""

    def get_queryset(self):
        return super().get_queryset().filter(active=True)


class TeamMember(models.Model):
    name = models.CharField(max_length=100)
    position = models.CharField(max_length=100)
    bio = models.TextField(blank=True)
    image_url = models.CharField(max_length=500)
    email = models.EmailField(blank=True)
    linkedin_url = models.URLField(max_length=500, blank=True)
    sort_order = models.IntegerField(default=0, help_text="Order to display on the team page")
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    public = VisibleManager()

    class Meta:
        ordering = ['sort_order', 'id']

    def __str__(self):
        return self.name


class Testimonial(models.Model):
    client_name = models.CharField(max_length=100)
    client_position = models.CharField(max_length=100, blank=True, help_text="e.g. 'Homeowner' or 'CEO, Acme'")
    testimonial_text = models.TextField()
    rating = models.IntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text="Star rating (1-5)",
    )
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='testimonials',
    )
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = models.Manager()
    public = VisibleManager()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.client_name


class SiteSetting(models.Model):
    setting_key = models.CharField(max_length=100, unique=True)
    setting_value = models.JSONField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['setting_key']

    def __str__(self):
        return self.setting_key
