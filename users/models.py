"""
Custom User model for the announcement board.

Every account is a board administrator; the role decides whether it may
also manage other administrator accounts.
"""

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from users.enums import UserRole


class BoardUserManager(UserManager):
    """
    Manager that keeps `createsuperuser` accounts in the SUPER_ADMIN role.
    """

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", UserRole.SUPER_ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model extending AbstractUser.

    Adds the board role and created_at / updated_at timestamps for auditing.
    """

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.ADMIN,
        db_index=True,
        help_text='Board role: SUPER_ADMIN may manage administrator accounts'
    )

    # Add timestamp fields for auditing
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BoardUserManager()

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['-created_at']

    def __str__(self):
        """Return string representation of user."""
        return self.username

    @property
    def is_super_admin(self):
        return self.role == UserRole.SUPER_ADMIN
