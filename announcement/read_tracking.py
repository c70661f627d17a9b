"""
Read-count de-duplication.

A read of one announcement by one client counts at most once per
READ_COOLDOWN_SECONDS. Last-counted timestamps live in the `read_cooldown`
cache alias; local memory by default, so the window is per process and
resets on restart. Point the alias at a shared backend to dedupe across
instances.
"""

from datetime import timedelta

from django.conf import settings
from django.core.cache import caches
from django.utils import timezone

READ_COOLDOWN_CACHE_ALIAS = "read_cooldown"


def get_client_address(request):
    """
    Best-effort client address used as the dedup key, not a security control.

    The first X-Forwarded-For entry is only trusted when
    READ_TRACKING_TRUST_X_FORWARDED_FOR is enabled.
    """
    if getattr(settings, "READ_TRACKING_TRUST_X_FORWARDED_FOR", False):
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.META.get("REMOTE_ADDR") or "unknown"


class ReadCooldown:
    def __init__(self, window_seconds=None, cache_alias=READ_COOLDOWN_CACHE_ALIAS):
        if window_seconds is None:
            window_seconds = settings.READ_COOLDOWN_SECONDS
        self.window_seconds = window_seconds
        self.cache = caches[cache_alias]

    @staticmethod
    def make_key(client, announcement_id):
        return f"read:{announcement_id}:{client}"

    def should_count(self, client, announcement_id, now=None):
        """
        Return True (and remember `now`) unless this client's last counted
        read of the announcement is still inside the window.
        """
        now = now or timezone.now()
        key = self.make_key(client, announcement_id)

        # First read for the key: add() is atomic on shared backends
        if self.cache.add(key, now, timeout=self.window_seconds):
            return True

        last_counted = self.cache.get(key)
        if last_counted is not None and now - last_counted < timedelta(seconds=self.window_seconds):
            return False

        self.cache.set(key, now, timeout=self.window_seconds)
        return True
