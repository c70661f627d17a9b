"""
Tests for read-count de-duplication.
"""

from datetime import timedelta

from django.test import RequestFactory
from django.utils import timezone

from announcement.read_tracking import ReadCooldown, get_client_address


class TestReadCooldown:

    def test_first_read_counts(self):
        assert ReadCooldown(window_seconds=60).should_count("10.0.0.1", "a1") is True

    def test_second_read_inside_window_does_not_count(self):
        cooldown = ReadCooldown(window_seconds=60)
        t0 = timezone.now()

        assert cooldown.should_count("10.0.0.1", "a1", now=t0) is True
        assert cooldown.should_count("10.0.0.1", "a1", now=t0 + timedelta(seconds=59)) is False

    def test_read_after_window_counts_again(self):
        cooldown = ReadCooldown(window_seconds=60)
        t0 = timezone.now()

        assert cooldown.should_count("10.0.0.1", "a1", now=t0) is True
        assert cooldown.should_count("10.0.0.1", "a1", now=t0 + timedelta(seconds=60)) is True
        assert cooldown.should_count("10.0.0.1", "a1", now=t0 + timedelta(seconds=90)) is False

    def test_uncounted_read_does_not_extend_window(self):
        cooldown = ReadCooldown(window_seconds=60)
        t0 = timezone.now()

        cooldown.should_count("10.0.0.1", "a1", now=t0)
        cooldown.should_count("10.0.0.1", "a1", now=t0 + timedelta(seconds=30))
        assert cooldown.should_count("10.0.0.1", "a1", now=t0 + timedelta(seconds=61)) is True

    def test_keys_are_per_client_and_per_announcement(self):
        cooldown = ReadCooldown(window_seconds=60)
        t0 = timezone.now()

        assert cooldown.should_count("10.0.0.1", "a1", now=t0) is True
        assert cooldown.should_count("10.0.0.2", "a1", now=t0) is True
        assert cooldown.should_count("10.0.0.1", "a2", now=t0) is True

    def test_window_defaults_to_setting(self, settings):
        settings.READ_COOLDOWN_SECONDS = 5
        assert ReadCooldown().window_seconds == 5


class TestClientAddress:

    def test_uses_remote_addr(self, settings):
        settings.READ_TRACKING_TRUST_X_FORWARDED_FOR = False
        request = RequestFactory().get("/", REMOTE_ADDR="192.0.2.1", HTTP_X_FORWARDED_FOR="203.0.113.9")
        assert get_client_address(request) == "192.0.2.1"

    def test_uses_first_forwarded_address_when_trusted(self, settings):
        settings.READ_TRACKING_TRUST_X_FORWARDED_FOR = True
        request = RequestFactory().get(
            "/", REMOTE_ADDR="192.0.2.1", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1"
        )
        assert get_client_address(request) == "203.0.113.9"

    def test_falls_back_to_remote_addr_without_header(self, settings):
        settings.READ_TRACKING_TRUST_X_FORWARDED_FOR = True
        request = RequestFactory().get("/", REMOTE_ADDR="192.0.2.1")
        assert get_client_address(request) == "192.0.2.1"
