"""
Enum definitions for announcement-related choices.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class PublishStatus(models.TextChoices):
    """
    Publication lifecycle of an announcement.

    Exactly one status holds at a time: `published` iff is_published,
    `scheduled` iff a publish time is set and the row is not yet published,
    otherwise `draft`.
    """

    DRAFT = "draft", _("草稿")
    SCHEDULED = "scheduled", _("定时发布")
    PUBLISHED = "published", _("已发布")
