"""
Enum definitions for user-related choices.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class UserRole(models.TextChoices):
    """
    User role choices for permission management.

    SUPER_ADMIN manages administrator accounts; both roles manage board content.
    """

    SUPER_ADMIN = "SUPER_ADMIN", _("超级管理员")
    ADMIN = "ADMIN", _("管理员")
