from django.contrib import admin
from .models import Project, ProjectImage


class ProjectImageInline(admin.TabularInline):
    model = ProjectImage
    extra = 0
    ordering = ('sort_order',)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('title', 'category', 'year', 'featured', 'created_at')
    list_filter = ('category', 'featured')
    search_fields = ('title', 'client', 'location')
    inlines = [ProjectImageInline]
