from django.db import models


class Project(models.Model):
    CATEGORY_CHOICES = [
        ('Residential', 'Residential'),
        ('Commercial', 'Commercial'),
        ('Hospitality', 'Hospitality'),
        ('Mixed-Use', 'Mixed-Use'),
    ]

    title = models.CharField(max_length=200)
    category = models.CharField(max_length=50, choices=CATEGORY_CHOICES, blank=True)
    location = models.CharField(max_length=200, blank=True)
    year = models.CharField(max_length=20, blank=True, help_text="Display label, e.g. '2023'")
    description = models.TextField(blank=True, help_text="Short description for the card")
    details = models.TextField(blank=True)
    client = models.CharField(max_length=200, blank=True)
    area = models.CharField(max_length=100, blank=True)
    duration = models.CharField(max_length=100, blank=True)
    featured = models.BooleanField(default=False)
    # Required by the dashboard form only; the table accepts ''
    main_image = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class ProjectImage(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='project_images')
    image_url = models.CharField(max_length=500)
    alt_text = models.CharField(max_length=255, blank=True)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['sort_order', 'id']

    def __str__(self):
        return f"{self.project_id} #{self.sort_order}"
