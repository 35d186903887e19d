# dashboard/urls.py

from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    # AUTH URLS (Public)
    path('login/', views.login_page, name='login'),
    path('logout/', views.logout_page, name='logout'),

    path('', views.index, name='index'),

    # Projects
    path('projects/new/', views.project_new, name='project_new'),
    path('projects/form/', views.project_form, name='project_form'),
    path('projects/<int:pk>/edit/', views.project_edit, name='project_edit'),
    path('projects/<int:pk>/delete/', views.project_delete, name='project_delete'),

    # Team
    path('team/new/', views.team_new, name='team_new'),
    path('team/form/', views.team_form, name='team_form'),
    path('team/<int:pk>/edit/', views.team_edit, name='team_edit'),
    path('team/<int:pk>/delete/', views.team_delete, name='team_delete'),

    # Testimonials
    path('testimonials/new/', views.testimonial_new, name='testimonial_new'),
    path('testimonials/form/', views.testimonial_form, name='testimonial_form'),
    path('testimonials/<int:pk>/edit/', views.testimonial_edit, name='testimonial_edit'),
    path('testimonials/<int:pk>/delete/', views.testimonial_delete, name='testimonial_delete'),

    # Site settings
    path('hero/', views.hero_slides, name='hero'),
    path('settings/', views.site_settings, name='settings'),
]
