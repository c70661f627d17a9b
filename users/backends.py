"""
Custom authentication backends for the announcement board.

Accounts carried over from the previous board may still hold a plaintext
password. Those are accepted once and immediately re-hashed.
"""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.contrib.auth.hashers import UNUSABLE_PASSWORD_PREFIX, identify_hasher
from django.utils.crypto import constant_time_compare

logger = logging.getLogger(__name__)

User = get_user_model()


def is_legacy_plaintext(encoded):
    """
    Return True when a stored password is not in any known hasher format.
    """
    if not encoded or encoded.startswith(UNUSABLE_PASSWORD_PREFIX):
        return False
    try:
        identify_hasher(encoded)
    except ValueError:
        return True
    return False


class LegacyPasswordBackend(ModelBackend):
    """
    Authentication backend that checks hashed passwords first and falls back
    to a plaintext comparison for legacy rows.

    A successful plaintext match upgrades the row to the default hasher, so
    the fallback is only ever used once per account.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        """
        Authenticate user by username.

        Args:
            request: The HTTP request object
            username: The username to authenticate with
            password: The user's password
            **kwargs: Additional keyword arguments

        Returns:
            User object if authentication succeeds, None otherwise
        """
        if username is None or password is None:
            return None

        try:
            user = User.objects.get(username=username)
        except User.DoesNotExist:
            # Run the default password hasher once to reduce timing
            # difference between existing and non-existing users
            User().set_password(password)
            return None

        if not self.user_can_authenticate(user):
            return None

        if is_legacy_plaintext(user.password):
            if constant_time_compare(user.password, password):
                user.set_password(password)
                user.save(update_fields=["password"])
                logger.info("Upgraded legacy plaintext password for user %s", user.username)
                return user
            return None

        if user.check_password(password):
            return user

        return None
