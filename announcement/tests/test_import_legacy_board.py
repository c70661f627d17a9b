"""
Tests for `manage.py import_legacy_board`.
"""

import sqlite3

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from announcement.models import Announcement
from events.models import Event
from images.models import Image
from users.enums import UserRole

User = get_user_model()

LEGACY_BCRYPT = "$2b$10$abcdefghijklmnopqrstuuK4hZ0Z8Y5x6n0F0b7a4C6dE8fG9hI1u"


def build_legacy_db(path):
    connection = sqlite3.connect(path)
    connection.executescript(
        """
        CREATE TABLE users (id INTEGER PRIMARY KEY, username TEXT, password TEXT, role TEXT, createdAt TEXT);
        CREATE TABLE images (id INTEGER PRIMARY KEY, filename TEXT, url TEXT, createdAt TEXT);
        CREATE TABLE announcements (
            id INTEGER PRIMARY KEY, title TEXT, content TEXT, category TEXT, author TEXT,
            isPublished INTEGER, scheduledPublishAt TEXT, isPinned INTEGER, pinnedAt TEXT,
            priority INTEGER, readCount INTEGER, createdAt TEXT, updatedAt TEXT
        );
        CREATE TABLE events (
            id INTEGER PRIMARY KEY, title TEXT, description TEXT,
            startDate TEXT, endDate TEXT, createdAt TEXT
        );
        """
    )
    connection.executemany(
        "INSERT INTO users (username, password, role, createdAt) VALUES (?, ?, ?, ?)",
        [
            ("admin", LEGACY_BCRYPT, "super_admin", "2023-09-01 08:00:00"),
            ("counselor", "plain-secret", "admin", "2023-09-02 08:00:00"),
        ],
    )
    connection.execute(
        "INSERT INTO images (filename, url, createdAt) VALUES (?, ?, ?)",
        ("legacy.png", "/uploads/legacy.png", "2023-09-03 08:00:00"),
    )
    connection.executemany(
        "INSERT INTO announcements (title, content, category, author, isPublished, scheduledPublishAt,"
        " isPinned, pinnedAt, priority, readCount, createdAt, updatedAt)"
        " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        [
            ("开学典礼", "![](/uploads/legacy.png)", "学校通知", "校办", 1, None, 1,
             "2023-09-04 09:00:00", 3, 42, "2023-09-04 08:00:00", "2023-09-04 09:00:00"),
            ("期中考试", "草稿", "教务", "教务处", 0, None, 0, None, 1, 0,
             "2023-10-01 08:00:00", "2023-10-01 08:00:00"),
        ],
    )
    connection.execute(
        "INSERT INTO events (title, description, startDate, endDate, createdAt) VALUES (?, ?, ?, ?, ?)",
        ("秋游", None, "2023-10-20T08:30:00.000Z", "2023-10-20T16:00:00.000Z", "2023-10-01 08:00:00"),
    )
    connection.commit()
    connection.close()


@pytest.fixture
def legacy_board(tmp_path):
    uploads = tmp_path / "legacy-uploads"
    uploads.mkdir()
    (uploads / "legacy.png").write_bytes(b"\x89PNG legacy")
    db_path = tmp_path / "database.db"
    build_legacy_db(str(db_path))
    return db_path, uploads


@pytest.mark.django_db
class TestImportLegacyBoard:

    def test_imports_every_table(self, legacy_board, media_root, capsys):
        db_path, uploads = legacy_board

        call_command("import_legacy_board", str(db_path), "--uploads-dir", str(uploads))

        admin = User.objects.get(username="admin")
        assert admin.role == UserRole.SUPER_ADMIN
        assert admin.password == "bcrypt$" + LEGACY_BCRYPT

        counselor = User.objects.get(username="counselor")
        assert counselor.role == UserRole.ADMIN
        assert counselor.password == "plain-secret"

        image = Image.objects.get()
        assert image.url.startswith("/media/uploads/")
        assert (media_root / "uploads" / image.filename).read_bytes() == b"\x89PNG legacy"
        assert image.reference_count == 1

        published = Announcement.objects.get(title="开学典礼")
        assert published.content == f"![]({image.url})"
        assert published.publish_status == "published"
        assert published.is_pinned is True
        assert published.priority == 3
        assert published.read_count == 42
        assert published.create_time.year == 2023

        assert Announcement.objects.get(title="期中考试").publish_status == "draft"

        event = Event.objects.get()
        assert event.start_time.hour == 8
        assert event.description == ""

        assert "Imported 2 user(s), 1 image(s), 2 announcement(s), 1 event(s)" in capsys.readouterr().out

    def test_plaintext_password_upgrades_on_login(self, legacy_board, media_root, api_client):
        db_path, uploads = legacy_board
        call_command("import_legacy_board", str(db_path), "--uploads-dir", str(uploads))

        response = api_client.post(
            '/api/auth/login/', {'username': 'counselor', 'password': 'plain-secret'}, format='json'
        )

        assert response.status_code == 200
        assert User.objects.get(username="counselor").password != "plain-secret"

    def test_rerun_skips_existing_rows(self, legacy_board, media_root):
        db_path, uploads = legacy_board

        call_command("import_legacy_board", str(db_path), "--uploads-dir", str(uploads))
        call_command("import_legacy_board", str(db_path), "--uploads-dir", str(uploads))

        assert User.objects.count() == 2
        assert Announcement.objects.count() == 2
        assert Image.objects.count() == 1
        assert Event.objects.count() == 1

    def test_missing_database_is_an_error(self, tmp_path):
        with pytest.raises(CommandError):
            call_command("import_legacy_board", str(tmp_path / "nope.db"))
