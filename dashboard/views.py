# dashboard/views.py
import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_POST

from accounts.services import AdminUserService
from content.site_config import CONTACT_FIELDS, SOCIAL_FIELDS, STAT_FIELDS, parse_int
from projects.models import Project
from .decorators import operator_required, redirect_authenticated_user, super_admin_required
from .panel import ADDITIONAL_IMAGE, ERROR, HERO_IMAGE, MAIN_IMAGE, TEAM_IMAGE, AdminPanel
from .state import TABS, PanelState

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_panel'


# ============================================
# HELPER FUNCTIONS
# ============================================

def _open_panel(request):
    """Rebuild the operator's panel from the session."""
    state = PanelState.from_session(request.session.get(SESSION_KEY))
    return AdminPanel(request.user, state)


def _close_panel(request, panel, tab=None):
    """Persist unsaved state, hand notices to the messages framework and go back to the panel."""
    for notice in panel.notices:
        if notice.level == ERROR:
            messages.error(request, notice.message)
        else:
            messages.success(request, notice.message)
    panel.notices = []

    if tab:
        panel.set_active_tab(tab)
    request.session[SESSION_KEY] = panel.state.to_session()
    return redirect(f"{reverse('dashboard:index')}?tab={panel.state.active_tab}")


def _posted_index(request):
    raw = request.POST.get('index')
    return parse_int(raw) if raw not in (None, '') else None


# ============== AUTH VIEWS ==============

@redirect_authenticated_user
@ensure_csrf_cookie
def login_page(request):
    """Sign an admin user in with username and password."""
    if request.method == 'POST':
        username = request.POST.get('username', '').strip()
        password = request.POST.get('password', '')

        user = AdminUserService.authenticate(username, password, request=request)
        if user is None:
            messages.error(request, 'Invalid username or password.')
            return render(request, 'dashboard/login.html', {'username': username})

        login(request, user)
        logger.info("Admin %s signed in", user.username)

        next_url = request.GET.get('next') or request.POST.get('next')
        if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
            return redirect(next_url)
        return redirect('dashboard:index')

    return render(request, 'dashboard/login.html')


def logout_page(request):
    """Sign out; the session, unsaved panel state included, is discarded."""
    storage = messages.get_messages(request)
    storage.used = True

    logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('dashboard:login')


# ==========================
# PANEL
# ==========================

@operator_required
@ensure_csrf_cookie
def index(request):
    panel = _open_panel(request)
    panel.set_active_tab(request.GET.get('tab'))
    panel.load_data(include_settings=not panel.state.settings_loaded)
    if panel.load_error:
        messages.error(request, panel.load_error)
    request.session[SESSION_KEY] = panel.state.to_session()

    state = panel.state
    context = {
        'panel': panel,
        'state': state,
        'tabs': TABS,
        'can_edit': panel.can_edit(),
        'categories': Project.CATEGORY_CHOICES,
        'stat_rows': [(name, state.site_stats.get(name, 0)) for name in STAT_FIELDS],
        'contact_rows': [(name, state.contact_info.get(name, '')) for name in CONTACT_FIELDS],
        'social_rows': [(name, state.social_links.get(name, '')) for name in SOCIAL_FIELDS],
    }
    return render(request, 'dashboard/panel.html', context)


# ============== PROJECTS ==============

@operator_required
@require_POST
def project_new(request):
    panel = _open_panel(request)
    panel.new_project()
    return _close_panel(request, panel, tab='projects')


@operator_required
@require_POST
def project_edit(request, pk):
    panel = _open_panel(request)
    if panel.load_data(include_settings=False):
        project = panel.find_project(pk)
        if project is None:
            panel.notify(ERROR, 'Project not found.')
        else:
            panel.edit_project(project)
    return _close_panel(request, panel, tab='projects')


@operator_required
@require_POST
def project_form(request):
    """
    The open project form posts here for every button: the scalar fields are
    copied into the draft first, then `action` decides what else happens.
    """
    panel = _open_panel(request)
    panel.update_project_form(request.POST)
    action = request.POST.get('action', 'save')

    if action == 'upload_main':
        panel.handle_image_upload(request.FILES.get('main_image_file'), MAIN_IMAGE)
    elif action == 'upload_additional':
        for upload in request.FILES.getlist('additional_image_files'):
            if panel.handle_image_upload(upload, ADDITIONAL_IMAGE) is None:
                break
    elif action == 'remove_image':
        index = _posted_index(request)
        if index is not None:
            panel.remove_additional_image(index)
    elif action == 'cancel':
        panel.close_project_form()
    else:
        panel.submit_project()
    return _close_panel(request, panel, tab='projects')


@operator_required
@super_admin_required
@require_POST
def project_delete(request, pk):
    panel = _open_panel(request)
    panel.delete_project(pk)
    return _close_panel(request, panel, tab='projects')


# ============== TEAM ==============

@operator_required
@require_POST
def team_new(request):
    panel = _open_panel(request)
    panel.new_team_member()
    return _close_panel(request, panel, tab='team')


@operator_required
@require_POST
def team_edit(request, pk):
    panel = _open_panel(request)
    if panel.load_data(include_settings=False):
        member = panel.find_team_member(pk)
        if member is None:
            panel.notify(ERROR, 'Team member not found.')
        else:
            panel.edit_team_member(member)
    return _close_panel(request, panel, tab='team')


@operator_required
@require_POST
def team_form(request):
    panel = _open_panel(request)
    panel.update_team_member_form(request.POST)
    action = request.POST.get('action', 'save')

    if action == 'upload':
        panel.handle_image_upload(request.FILES.get('image_file'), TEAM_IMAGE)
    elif action == 'cancel':
        panel.close_team_form()
    else:
        panel.submit_team_member()
    return _close_panel(request, panel, tab='team')


@operator_required
@super_admin_required
@require_POST
def team_delete(request, pk):
    panel = _open_panel(request)
    panel.delete_team_member(pk)
    return _close_panel(request, panel, tab='team')


# ============== TESTIMONIALS ==============

@operator_required
@require_POST
def testimonial_new(request):
    panel = _open_panel(request)
    panel.new_testimonial()
    return _close_panel(request, panel, tab='testimonials')


@operator_required
@require_POST
def testimonial_edit(request, pk):
    panel = _open_panel(request)
    if panel.load_data(include_settings=False):
        testimonial = panel.find_testimonial(pk)
        if testimonial is None:
            panel.notify(ERROR, 'Testimonial not found.')
        else:
            panel.edit_testimonial(testimonial)
    return _close_panel(request, panel, tab='testimonials')


@operator_required
@require_POST
def testimonial_form(request):
    panel = _open_panel(request)
    panel.update_testimonial_form(request.POST)

    if request.POST.get('action') == 'cancel':
        panel.close_testimonial_form()
    else:
        panel.submit_testimonial()
    return _close_panel(request, panel, tab='testimonials')


@operator_required
@super_admin_required
@require_POST
def testimonial_delete(request, pk):
    panel = _open_panel(request)
    panel.delete_testimonial(pk)
    return _close_panel(request, panel, tab='testimonials')


# ============== HERO SLIDES & SETTINGS ==============

@operator_required
@require_POST
def hero_slides(request):
    """Edits to the slide list stay in the draft until `save`."""
    panel = _open_panel(request)

    for index in range(len(panel.state.hero_slides)):
        for name in ('title', 'subtitle', 'image'):
            key = f'slide-{index}-{name}'
            if key in request.POST:
                panel.update_hero_slide(index, name, request.POST[key])

    action = request.POST.get('action', 'save')
    index = _posted_index(request)
    if action == 'add':
        panel.add_hero_slide()
    elif action == 'remove' and index is not None:
        panel.remove_hero_slide(index)
    elif action == 'upload' and index is not None:
        panel.handle_image_upload(request.FILES.get(f'slide-{index}-image_file'), HERO_IMAGE, slide_index=index)
    elif action == 'save':
        panel.save_site_settings()
    return _close_panel(request, panel, tab='hero')


@operator_required
@require_POST
def site_settings(request):
    panel = _open_panel(request)
    panel.apply_settings_form(request.POST)
    if request.POST.get('action', 'save') == 'save':
        panel.save_site_settings()
    return _close_panel(request, panel, tab='settings')
