"""
media.py
--------
Uploads gallery images to the configured blob store (Django default_storage)
and hands back the public URL. Image bytes are never kept in the database.
"""

import logging
import os
import time

from django.core.files.storage import default_storage

from booking.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def gallery_path(barber, filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower() or ".jpg"
    return f"gallery/{barber.pk}/{int(time.time() * 1000)}{ext}"


def upload_gallery_image(barber, uploaded_file) -> str:
    """
    Returns:
        str: publicly resolvable URL of the stored file

    Raises:
        StoreUnavailable: the blob store rejected or failed the upload.
    """
    try:
        name = default_storage.save(gallery_path(barber, uploaded_file.name), uploaded_file)
        url = default_storage.url(name)
    except OSError as exc:
        logger.exception("Upload of %s for barber %s failed", uploaded_file.name, barber.pk)
        raise StoreUnavailable("Image upload failed. Please try again later.") from exc

    logger.info("Stored gallery image %s for barber %s", name, barber.pk)
    return url
