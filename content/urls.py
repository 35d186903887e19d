from django.urls import path
from .views import (
    TeamMemberListView, TeamMemberDetailView,
    TestimonialListView, TestimonialDetailView,
    SiteSettingView,
)

urlpatterns = [
    path('team/', TeamMemberListView.as_view(), name='team-list'),
    path('team/<int:pk>/', TeamMemberDetailView.as_view(), name='team-detail'),
    path('testimonials/', TestimonialListView.as_view(), name='testimonial-list'),
    path('testimonials/<int:pk>/', TestimonialDetailView.as_view(), name='testimonial-detail'),
    path('settings/<str:key>/', SiteSettingView.as_view(), name='site-setting'),
]
