# dashboard/uploads.py
import logging
import os
import uuid
from urllib.parse import urlparse

from PIL import Image as PILImage, UnidentifiedImageError
from django.conf import settings
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp', '.gif'}


class InvalidImage(ValueError):
    pass


def _validate(upload):
    size = getattr(upload, 'size', None)
    if size is not None and size > settings.MAX_UPLOAD_SIZE:
        raise InvalidImage('Image is larger than the upload limit')

    ext = os.path.splitext(getattr(upload, 'name', '') or '')[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidImage(f'Unsupported image type "{ext or "?"}"')

    try:
        img = PILImage.open(upload)
        img.verify()
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImage('File is not a readable image') from exc
    finally:
        upload.seek(0)
    return ext


def upload_image(upload):
    """Store an uploaded image and return its public URL."""
    ext = _validate(upload)
    name = f"{settings.UPLOAD_PREFIX}/{uuid.uuid4().hex}{ext}"
    saved_name = default_storage.save(name, upload)
    url = default_storage.url(saved_name)
    logger.info("Uploaded image %s", saved_name)
    return url


def _name_from_url(url):
    name_from_url = getattr(default_storage, 'name_from_url', None)
    if name_from_url is not None:
        return name_from_url(url)

    path = urlparse(url).path
    media_path = urlparse(settings.MEDIA_URL).path
    if not path.startswith(media_path):
        return None
    return path[len(media_path):] or None


def delete_image(url):
    """Remove a previously uploaded image. Unknown URLs are ignored."""
    name = _name_from_url(url)
    if not name:
        logger.warning("Not deleting %s: outside the media storage", url)
        return False
    default_storage.delete(name)
    logger.info("Deleted image %s", name)
    return True
