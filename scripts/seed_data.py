import os
import django

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')
django.setup()

from content.services import SiteSettingService, save_site_setting
from content.site_config import SETTING_KEYS, default_value

# Only keys with no stored row are written; edits made in the dashboard stay
stored = SiteSettingService.get_many(SETTING_KEYS)

for key in SETTING_KEYS:
    if key in stored:
        print(f"Skipped: {key}")
        continue
    save_site_setting(key, default_value(key))
    print(f"Created: {key}")

print("Done!")
