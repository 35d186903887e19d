# config/storage_backends.py

from storages.backends.s3boto3 import S3Boto3Storage
from django.conf import settings


class SupabaseS3Storage(S3Boto3Storage):
    """
    Storage backend for the public Supabase image bucket.
    Fixes URL generation for public bucket access.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.project_ref = getattr(settings, 'SUPABASE_PROJECT_REF', '')

    @property
    def public_base_url(self):
        return f"https://{self.project_ref}.supabase.co/storage/v1/object/public/{self.bucket_name}/"

    def url(self, name, parameters=None, expire=None, http_method=None):
        """
        Format: https://{project_ref}.supabase.co/storage/v1/object/public/{bucket}/{path}
        """
        if not name:
            return ''
        name = str(name).lstrip('/')
        return f"{self.public_base_url}{name}"

    def name_from_url(self, url):
        """Inverse of url(); returns None for URLs outside this bucket."""
        base = self.public_base_url
        if not url or not url.startswith(base):
            return None
        return url[len(base):] or None
