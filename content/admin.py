from django.contrib import admin
from .models import TeamMember, Testimonial, SiteSetting


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('name', 'position', 'sort_order', 'active')
    list_filter = ('active',)
    ordering = ('sort_order',)


@admin.register(Testimonial)
class TestimonialAdmin(admin.ModelAdmin):
    list_display = ('client_name', 'rating', 'project', 'active')
    list_filter = ('active', 'rating')


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    list_display = ('setting_key', 'updated_at')
