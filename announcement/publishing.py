"""
Publication state tracking for announcements.

`resolve_publish_state` decides the status columns from the two inputs an
editor controls; `publish_due_announcements` is the periodic pass that flips
scheduled announcements whose time has come.
"""

import logging

from django.db import DatabaseError
from django.utils import timezone

from announcement.enums import PublishStatus

logger = logging.getLogger(__name__)


def resolve_publish_state(is_published, scheduled_publish_at):
    """
    Resolve (is_published, scheduled_publish_at, publish_status).

    Immediate publish wins and keeps the scheduled time for reference; a
    scheduled time alone means `scheduled`; anything else is a draft with
    the scheduled time cleared.
    """
    if is_published:
        return True, scheduled_publish_at, PublishStatus.PUBLISHED
    if scheduled_publish_at is not None:
        return False, scheduled_publish_at, PublishStatus.SCHEDULED
    return False, None, PublishStatus.DRAFT


def publish_due_announcements(now=None):
    """
    Publish every scheduled announcement whose time is at or before `now`.

    Each row is flipped with an update conditioned on it still being
    scheduled, so overlapping passes never apply a transition twice. A
    failure on one row is logged and the pass moves on.

    Returns:
        list of ids that this pass actually published
    """
    from announcement.models import Announcement

    now = now or timezone.now()
    due_ids = list(
        Announcement.objects.filter(
            publish_status=PublishStatus.SCHEDULED,
            scheduled_publish_at__lte=now,
        ).values_list("pk", flat=True)
    )

    published = []
    for pk in due_ids:
        try:
            updated = Announcement.objects.filter(
                pk=pk, publish_status=PublishStatus.SCHEDULED
            ).update(
                is_published=True,
                publish_status=PublishStatus.PUBLISHED,
                update_time=now,
            )
        except DatabaseError:
            logger.exception("Failed to publish scheduled announcement %s", pk)
            continue
        if updated:
            published.append(pk)
            logger.info("Announcement %s published on schedule", pk)

    if due_ids:
        logger.debug("Scheduled publish pass: %d due, %d published", len(due_ids), len(published))
    return published
