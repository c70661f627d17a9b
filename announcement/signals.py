"""
Signals for the announcement app.

Keep image reference counts in step with announcement content on every ORM
path (API, admin site, shell).
"""

import logging

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from announcement.models import Announcement
from images.references import (
    apply_content_change,
    decrement_references,
    extract_image_urls,
    increment_references,
)

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Announcement)
def announcement_pre_save(sender, instance, raw=False, **kwargs):
    """
    在保存前记录旧内容，以便 post_save 计算图片引用的差异
    """
    if raw:
        return
    instance._old_content = (
        Announcement.objects.filter(pk=instance.pk).values_list("content", flat=True).first()
    )


@receiver(post_save, sender=Announcement)
def announcement_post_save(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    old_content = getattr(instance, "_old_content", None)
    instance._old_content = instance.content

    if created or old_content is None:
        increment_references(extract_image_urls(instance.content))
    else:
        apply_content_change(old_content, instance.content)


@receiver(post_delete, sender=Announcement)
def announcement_post_delete(sender, instance, **kwargs):
    urls = extract_image_urls(instance.content)
    if urls:
        logger.debug("Releasing %d image reference(s) of announcement %s", len(urls), instance.pk)
    decrement_references(urls)
