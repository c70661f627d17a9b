"""
Shared pytest fixtures for the board apps.
"""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from users.enums import UserRole

User = get_user_model()


@pytest.fixture
def api_client():
    """Fixture to provide APIClient instance."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username="editor", password="editorpass123", role=UserRole.ADMIN)


@pytest.fixture
def super_admin_user(db):
    return User.objects.create_user(username="admin", password="adminpass123", role=UserRole.SUPER_ADMIN)


def _authenticated_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def admin_client(admin_user):
    """APIClient carrying a valid access token for an ADMIN account."""
    return _authenticated_client(admin_user)


@pytest.fixture
def super_admin_client(super_admin_user):
    """APIClient carrying a valid access token for a SUPER_ADMIN account."""
    return _authenticated_client(super_admin_user)


@pytest.fixture
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def clear_read_cooldown_cache():
    """Local-memory caches outlive a single test; start every test empty."""
    from django.core.cache import caches

    caches["read_cooldown"].clear()
    yield
    caches["read_cooldown"].clear()


@pytest.fixture
def announcement_factory(db):
    """Create announcements with sensible defaults."""
    from announcement.models import Announcement

    def make_announcement(**kwargs):
        defaults = {
            "title": "开学通知",
            "content": "# 开学通知\n\n请按时报到。",
            "category": "学校通知",
            "author": "教务处",
        }
        defaults.update(kwargs)
        return Announcement.objects.create(**defaults)

    return make_announcement


@pytest.fixture
def image_factory(db):
    """Create Image rows without touching storage."""
    from images.models import Image

    counter = {"n": 0}

    def make_image(url=None, **kwargs):
        counter["n"] += 1
        n = counter["n"]
        url = url or f"/media/uploads/test-{n}.png"
        defaults = {
            "hash": f"{n:064x}",
            "filename": url.rsplit("/", 1)[-1],
            "url": url,
            "size": 128,
            "content_type": "image/png",
        }
        defaults.update(kwargs)
        return Image.objects.create(**defaults)

    return make_image
