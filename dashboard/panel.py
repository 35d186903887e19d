# dashboard/panel.py
"""
Admin panel controller.

`AdminPanel` owns the operator's unsaved form state (a `PanelState`) and runs
every create/update/delete flow of the dashboard against the entity services.
It never patches its loaded rows after a write: a successful write is always
followed by a full reload.
"""
import logging
from collections import namedtuple
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from accounts.models import AdminUser
from content.services import (
    TEAM_MEMBER_FIELDS, TESTIMONIAL_FIELDS,
    SiteSettingService, TeamMemberService, TestimonialService,
)
from content.site_config import (
    CONTACT_FIELDS, HERO_SLIDE_FIELDS, SETTING_KEYS, SOCIAL_FIELDS, STAT_FIELDS,
    decode_setting, encode_setting, parse_int,
)
from projects.services import PROJECT_FIELDS, ProjectImageService, ProjectService, sync_project
from . import uploads
from .state import (
    SETTING_ATTRS, TABS, PanelState,
    empty_hero_slide, empty_project_form, empty_team_member_form, empty_testimonial_form,
)

logger = logging.getLogger(__name__)

Notice = namedtuple('Notice', ['level', 'message'])

SUCCESS = 'success'
ERROR = 'error'

# Upload targets
MAIN_IMAGE = 'main'
ADDITIONAL_IMAGE = 'additional'
TEAM_IMAGE = 'team'
HERO_IMAGE = 'hero'
UPLOAD_TARGETS = (MAIN_IMAGE, ADDITIONAL_IMAGE, TEAM_IMAGE, HERO_IMAGE)

_TRUE_VALUES = ('true', '1', 'yes', 'on')


def _as_bool(value):
    if isinstance(value, bool):
        return value
    return str(value or '').strip().lower() in _TRUE_VALUES


def _clamp_rating(value):
    return max(1, min(5, parse_int(value, default=5)))


@dataclass
class Gateways:
    """The services the panel talks to; tests swap in fakes."""
    projects: Any = ProjectService
    project_images: Any = ProjectImageService
    team_members: Any = TeamMemberService
    testimonials: Any = TestimonialService
    site_settings: Any = SiteSettingService
    storage: Any = uploads


class AdminPanel:

    def __init__(self, operator, state=None, gateways=None):
        self.operator = operator
        self.state = state if state is not None else PanelState()
        self.gateways = gateways or Gateways()

        self.projects = []
        self.team_members = []
        self.testimonials = []
        self.load_error = None
        self.notices = []

    # ------------------------------------------------------------------
    # Guard
    # ------------------------------------------------------------------

    @property
    def operator_role(self):
        if isinstance(self.operator, Mapping):
            return self.operator.get('role')
        return getattr(self.operator, 'role', None)

    def can_edit(self):
        return self.operator_role == AdminUser.ROLE_SUPER_ADMIN

    def _guard(self, message):
        if self.can_edit():
            return True
        self.notify(ERROR, message)
        return False

    def notify(self, level, message):
        self.notices.append(Notice(level, message))

    def set_active_tab(self, tab):
        if tab in TABS:
            self.state.active_tab = tab

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_data(self, include_settings=True):
        """
        Re-read every list the dashboard shows. If any read fails none of the
        lists are replaced.
        """
        gw = self.gateways
        try:
            projects = gw.projects.get_all()
            team_members = gw.team_members.get_all(include_inactive=True)
            testimonials = gw.testimonials.get_all(include_inactive=True)
        except Exception:
            logger.exception("Error loading admin data")
            self.load_error = 'Failed to load admin data. Please check your permissions.'
            return False

        self.projects = projects
        self.team_members = team_members
        self.testimonials = testimonials
        self.load_error = None

        if include_settings:
            self.load_site_settings()
        return True

    def load_site_settings(self):
        """
        A stored value replaces its whole slice of state; a missing one keeps
        what is already there. Failures are logged and otherwise ignored.
        """
        try:
            stored = self.gateways.site_settings.get_many(SETTING_KEYS)
        except Exception:
            logger.exception("Error loading site settings")
            return False

        for key, attr in SETTING_ATTRS.items():
            value = decode_setting(key, stored.get(key))
            if value is not None:
                setattr(self.state, attr, value)
        self.state.settings_loaded = True
        return True

    def find_project(self, pk):
        return next((p for p in self.projects if p.pk == pk), None)

    def find_team_member(self, pk):
        return next((m for m in self.team_members if m.pk == pk), None)

    def find_testimonial(self, pk):
        return next((t for t in self.testimonials if t.pk == pk), None)

    # ------------------------------------------------------------------
    # Site settings
    # ------------------------------------------------------------------

    def update_stat(self, name, raw):
        if name not in STAT_FIELDS:
            raise KeyError(name)
        self.state.site_stats = {**self.state.site_stats, name: parse_int(raw)}

    def update_contact_info(self, name, value):
        if name not in CONTACT_FIELDS:
            raise KeyError(name)
        self.state.contact_info = {**self.state.contact_info, name: value}

    def update_social_link(self, name, value):
        if name not in SOCIAL_FIELDS:
            raise KeyError(name)
        self.state.social_links = {**self.state.social_links, name: value}

    def apply_settings_form(self, data):
        """Copy posted settings fields into state; missing fields are left alone."""
        for name in STAT_FIELDS:
            if name in data:
                self.update_stat(name, data[name])
        for name in CONTACT_FIELDS:
            if name in data:
                self.update_contact_info(name, data[name])
        for name in SOCIAL_FIELDS:
            if name in data:
                self.update_social_link(name, data[name])

    def add_hero_slide(self):
        self.state.hero_slides = [*self.state.hero_slides, empty_hero_slide()]

    def remove_hero_slide(self, index):
        self.state.hero_slides = [s for i, s in enumerate(self.state.hero_slides) if i != index]

    def update_hero_slide(self, index, name, value):
        if name not in HERO_SLIDE_FIELDS:
            raise KeyError(name)
        if not 0 <= index < len(self.state.hero_slides):
            return
        slides = list(self.state.hero_slides)
        slides[index] = {**slides[index], name: value}
        self.state.hero_slides = slides

    def save_site_settings(self):
        if not self._guard('You do not have permission to update settings.'):
            return False

        try:
            encoded = {key: encode_setting(key, getattr(self.state, attr)) for key, attr in SETTING_ATTRS.items()}
            for key, value in encoded.items():
                self.gateways.site_settings.set(key, value)
        except Exception:
            logger.exception("Error saving site settings")
            self.notify(ERROR, 'Error saving site settings. Please try again.')
            return False

        self.notify(SUCCESS, 'Site settings updated successfully!')
        return True

    # ------------------------------------------------------------------
    # Uploads
    # ------------------------------------------------------------------

    def handle_image_upload(self, upload, target=ADDITIONAL_IMAGE, slide_index=None):
        """Upload to storage and drop the URL into the matching form slot."""
        if not upload:
            return None
        if not self._guard('You do not have permission to upload images.'):
            return None

        try:
            url = self.gateways.storage.upload_image(upload)
        except Exception:
            logger.exception("Error uploading image")
            self.notify(ERROR, 'Error uploading image. Please try again.')
            return None

        if target == HERO_IMAGE and slide_index is not None:
            self.update_hero_slide(slide_index, 'image', url)
        elif target == TEAM_IMAGE:
            self.state.team_member_form = {**self.state.team_member_form, 'image_url': url}
        elif target == MAIN_IMAGE:
            self.state.project_form = {**self.state.project_form, 'main_image': url}
        else:
            form = self.state.project_form
            self.state.project_form = {**form, 'additional_images': [*form['additional_images'], url]}
        return url

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def new_project(self):
        self.state.project_form = empty_project_form()
        self.state.editing_project = None
        self.state.show_project_form = True

    def edit_project(self, project):
        images = list(project.project_images.all())
        self.state.editing_project = {
            'id': project.pk,
            'image_ids': [img.pk for img in images],
        }
        self.state.project_form = {
            **{name: getattr(project, name) for name in PROJECT_FIELDS},
            'additional_images': [img.image_url for img in images],
        }
        self.state.show_project_form = True

    def close_project_form(self):
        self.state.show_project_form = False
        self.state.editing_project = None
        self.state.project_form = empty_project_form()

    def update_project_form(self, data):
        form = dict(self.state.project_form)
        for name in PROJECT_FIELDS:
            if name == 'featured':
                form[name] = _as_bool(data.get(name))
            elif name in data:
                form[name] = data[name]
        self.state.project_form = form

    def remove_additional_image(self, index):
        form = self.state.project_form
        self.state.project_form = {
            **form,
            'additional_images': [url for i, url in enumerate(form['additional_images']) if i != index],
        }

    def submit_project(self):
        if not self._guard('You do not have permission to modify projects.'):
            return False

        form = self.state.project_form
        if not form.get('main_image'):
            self.notify(ERROR, 'Please upload a main image before saving the project.')
            return False

        editing = self.state.editing_project
        try:
            sync_project(
                {name: form.get(name) for name in PROJECT_FIELDS},
                list(form.get('additional_images') or []),
                project_id=editing['id'] if editing else None,
                previous_image_ids=editing['image_ids'] if editing else (),
                projects=self.gateways.projects,
                project_images=self.gateways.project_images,
            )
        except Exception:
            logger.exception("Error saving project")
            self.notify(ERROR, 'Error saving project. Please try again.')
            return False

        self.load_data()
        self.close_project_form()
        self.notify(SUCCESS, 'Project updated successfully!' if editing else 'Project created successfully!')
        return True

    def delete_project(self, pk):
        return self._delete(self.gateways.projects, pk, 'project')

    # ------------------------------------------------------------------
    # Team members
    # ------------------------------------------------------------------

    def new_team_member(self):
        self.state.team_member_form = empty_team_member_form()
        self.state.editing_team_member_id = None
        self.state.show_team_form = True

    def edit_team_member(self, member):
        self.state.editing_team_member_id = member.pk
        self.state.team_member_form = {name: getattr(member, name) for name in TEAM_MEMBER_FIELDS}
        self.state.show_team_form = True

    def close_team_form(self):
        self.state.show_team_form = False
        self.state.editing_team_member_id = None
        self.state.team_member_form = empty_team_member_form()

    def update_team_member_form(self, data):
        form = dict(self.state.team_member_form)
        for name in TEAM_MEMBER_FIELDS:
            if name == 'active':
                form[name] = _as_bool(data.get(name))
            elif name == 'sort_order' and name in data:
                form[name] = parse_int(data[name])
            elif name in data:
                form[name] = data[name]
        self.state.team_member_form = form

    def submit_team_member(self):
        if not self._guard('You do not have permission to modify team members.'):
            return False
        saved = self._save(
            self.gateways.team_members,
            self.state.editing_team_member_id,
            dict(self.state.team_member_form),
            'team member',
        )
        if saved:
            self.close_team_form()
        return saved

    def delete_team_member(self, pk):
        return self._delete(self.gateways.team_members, pk, 'team member')

    # ------------------------------------------------------------------
    # Testimonials
    # ------------------------------------------------------------------

    def new_testimonial(self):
        self.state.testimonial_form = empty_testimonial_form()
        self.state.editing_testimonial_id = None
        self.state.show_testimonial_form = True

    def edit_testimonial(self, testimonial):
        self.state.editing_testimonial_id = testimonial.pk
        self.state.testimonial_form = {name: getattr(testimonial, name) for name in TESTIMONIAL_FIELDS}
        self.state.show_testimonial_form = True

    def close_testimonial_form(self):
        self.state.show_testimonial_form = False
        self.state.editing_testimonial_id = None
        self.state.testimonial_form = empty_testimonial_form()

    def update_testimonial_form(self, data):
        form = dict(self.state.testimonial_form)
        for name in TESTIMONIAL_FIELDS:
            if name == 'active':
                form[name] = _as_bool(data.get(name))
            elif name not in data:
                continue
            elif name == 'rating':
                form[name] = _clamp_rating(data[name])
            elif name == 'project_id':
                form[name] = parse_int(data[name]) or None
            else:
                form[name] = data[name]
        self.state.testimonial_form = form

    def submit_testimonial(self):
        if not self._guard('You do not have permission to modify testimonials.'):
            return False
        saved = self._save(
            self.gateways.testimonials,
            self.state.editing_testimonial_id,
            dict(self.state.testimonial_form),
            'testimonial',
        )
        if saved:
            self.close_testimonial_form()
        return saved

    def delete_testimonial(self, pk):
        return self._delete(self.gateways.testimonials, pk, 'testimonial')

    # ------------------------------------------------------------------
    # Shared write paths
    # ------------------------------------------------------------------

    def _save(self, service, editing_id, fields, label):
        try:
            if editing_id is not None:
                service.update(editing_id, **fields)
            else:
                service.create(**fields)
        except Exception:
            logger.exception("Error saving %s", label)
            self.notify(ERROR, f'Error saving {label}. Please try again.')
            return False

        self.load_data()
        action = 'updated' if editing_id is not None else 'created'
        self.notify(SUCCESS, f'{label.capitalize()} {action} successfully!')
        return True

    def _delete(self, service, pk, label):
        if not self._guard(f'You do not have permission to delete {label}s.'):
            return False
        try:
            service.delete(pk)
        except Exception:
            logger.exception("Error deleting %s %s", label, pk)
            self.notify(ERROR, f'Error deleting {label}. Please try again.')
            return False

        self.load_data()
        self.notify(SUCCESS, f'{label.capitalize()} deleted successfully!')
        return True
