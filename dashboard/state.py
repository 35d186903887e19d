# dashboard/state.py
from dataclasses import asdict, dataclass, field, fields
from typing import Optional

from content.site_config import CONTACT_INFO, HERO_SLIDES, SOCIAL_LINKS, STATS, default_value

TABS = ['projects', 'team', 'testimonials', 'hero', 'settings']


def empty_project_form():
    return {
        'title': '',
        'category': '',
        'location': '',
        'year': '',
        'description': '',
        'details': '',
        'client': '',
        'area': '',
        'duration': '',
        'featured': False,
        'main_image': '',
        'additional_images': [],
    }


def empty_team_member_form():
    return {
        'name': '',
        'position': '',
        'bio': '',
        'image_url': '',
        'email': '',
        'linkedin_url': '',
        'sort_order': 0,
        'active': True,
    }


def empty_testimonial_form():
    return {
        'client_name': '',
        'client_position': '',
        'testimonial_text': '',
        'rating': 5,
        'project_id': None,
        'active': True,
    }


def empty_hero_slide():
    return {'image': '', 'title': '', 'subtitle': ''}


@dataclass
class PanelState:
    """
    Everything the operator is editing but has not saved yet.

    Lives in the Django session between requests; the loaded rows are not part
    of it and are re-read on every request.
    """
    active_tab: str = 'projects'

    project_form: dict = field(default_factory=empty_project_form)
    # {'id': ..., 'image_ids': [...]} for the project being edited, as last loaded
    editing_project: Optional[dict] = None
    show_project_form: bool = False

    team_member_form: dict = field(default_factory=empty_team_member_form)
    editing_team_member_id: Optional[int] = None
    show_team_form: bool = False

    testimonial_form: dict = field(default_factory=empty_testimonial_form)
    editing_testimonial_id: Optional[int] = None
    show_testimonial_form: bool = False

    site_stats: dict = field(default_factory=lambda: default_value(STATS))
    contact_info: dict = field(default_factory=lambda: default_value(CONTACT_INFO))
    social_links: dict = field(default_factory=lambda: default_value(SOCIAL_LINKS))
    hero_slides: list = field(default_factory=lambda: default_value(HERO_SLIDES))
    settings_loaded: bool = False

    def to_session(self):
        return asdict(self)

    @classmethod
    def from_session(cls, data):
        """Rebuild from the session; anything unreadable starts fresh."""
        if not isinstance(data, dict):
            return cls()
        known = {f.name for f in fields(cls)}
        try:
            return cls(**{key: value for key, value in data.items() if key in known})
        except TypeError:
            return cls()


# settings key -> PanelState attribute
SETTING_ATTRS = {
    STATS: 'site_stats',
    CONTACT_INFO: 'contact_info',
    SOCIAL_LINKS: 'social_links',
    HERO_SLIDES: 'hero_slides',
}
