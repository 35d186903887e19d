# landing/views.py
from django.http import Http404
from django.shortcuts import render

from content.services import TeamMemberService, TestimonialService, get_site_setting
from content.site_config import CONTACT_INFO, HERO_SLIDES, SOCIAL_LINKS, STATS
from projects.models import Project
from projects.services import ProjectService, compose_gallery, related_projects


def _site_context(**extra):
    """Contact details and social links appear in every page footer."""
    return {
        'contact_info': get_site_setting(CONTACT_INFO),
        'social_links': get_site_setting(SOCIAL_LINKS),
        **extra,
    }


def home(request):
    """Home/Landing page"""
    context = _site_context(
        page_title='Home',
        hero_slides=get_site_setting(HERO_SLIDES),
        stats=get_site_setting(STATS),
        featured_projects=ProjectService.get_featured()[:6],
        testimonials=TestimonialService.get_all()[:6],
    )
    return render(request, 'landing/home.html', context)


def projects(request):
    """Portfolio, optionally narrowed to one category."""
    category = request.GET.get('category', '')
    all_projects = ProjectService.get_all()
    if category:
        all_projects = [p for p in all_projects if p.category == category]

    context = _site_context(
        page_title='Projects',
        projects=all_projects,
        categories=[value for value, _ in Project.CATEGORY_CHOICES],
        active_category=category,
    )
    return render(request, 'landing/projects.html', context)


def project_detail(request, pk):
    project = ProjectService.get_by_id(pk)
    if project is None:
        raise Http404('Project not found')

    context = _site_context(
        page_title=project.title,
        project=project,
        gallery=compose_gallery(project),
        related=related_projects(project, ProjectService.get_all()),
    )
    return render(request, 'landing/project_detail.html', context)


def team(request):
    context = _site_context(
        page_title='Our Team',
        team_members=TeamMemberService.get_all(),
        stats=get_site_setting(STATS),
    )
    return render(request, 'landing/team.html', context)


def contact(request):
    """Contact page"""
    return render(request, 'landing/contact.html', _site_context(page_title='Contact Us'))
