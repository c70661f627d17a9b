"""
Garbage collection of images no announcement references any more.
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import DatabaseError
from django.utils import timezone

from images.models import Image

logger = logging.getLogger(__name__)


def purge_orphan_images(now=None, retention_days=None):
    """
    Delete unreferenced images older than the retention period.

    The file goes first. A file that is already missing is only logged; any
    other OS error keeps the row so the next pass retries. The row delete
    re-checks `reference_count == 0`, so an image re-embedded since it was
    selected survives.

    Returns:
        dict with checked / deleted / missing_files / failed / skipped counts
    """
    now = now or timezone.now()
    if retention_days is None:
        retention_days = settings.IMAGE_RETENTION_DAYS
    cutoff = now - timedelta(days=retention_days)

    summary = {"checked": 0, "deleted": 0, "missing_files": 0, "failed": 0, "skipped": 0}
    candidates = Image.objects.filter(reference_count=0, create_time__lt=cutoff)

    for image in candidates.iterator():
        summary["checked"] += 1
        name = image.storage_name

        try:
            if default_storage.exists(name):
                default_storage.delete(name)
            else:
                logger.warning("File for orphaned image %s is already missing: %s", image.pk, name)
                summary["missing_files"] += 1
        except OSError:
            logger.exception("Failed to delete file %s; keeping image %s for the next pass", name, image.pk)
            summary["failed"] += 1
            continue

        try:
            deleted, _ = Image.objects.filter(pk=image.pk, reference_count=0).delete()
        except DatabaseError:
            logger.exception("Failed to delete image row %s", image.pk)
            summary["failed"] += 1
            continue

        if deleted:
            summary["deleted"] += 1
            logger.info("Purged orphaned image %s", image.url)
        else:
            summary["skipped"] += 1
            logger.warning("Image %s was referenced again during cleanup; row kept", image.url)

    if summary["checked"]:
        logger.info("Orphan image cleanup finished: %s", summary)
    return summary
