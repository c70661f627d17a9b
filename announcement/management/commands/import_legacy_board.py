"""
Import the data of the previous Node.js board from its SQLite file.

Users keep their password: bcrypt hashes are re-prefixed for Django's bcrypt
hasher, plaintext values are stored as-is and upgraded on first login.
Images are copied into MEDIA_ROOT when `--uploads-dir` points at the old
upload directory, and the urls embedded in announcement content are
rewritten to the new locations.
"""

import datetime
import hashlib
import logging
import os
import posixpath
import sqlite3
import uuid

from django.contrib.auth import get_user_model
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from announcement.models import Announcement
from events.dates import split_date_value
from events.models import Event
from images.models import Image
from images.references import normalize_image_url, recount_references
from images.uploads import storage_url_path
from users.enums import UserRole

logger = logging.getLogger(__name__)

LEGACY_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")
LEGACY_SUPER_ADMIN_ROLES = {"super_admin", "superadmin", "super-admin"}


def convert_legacy_password(value):
    """Map a stored legacy password to a value Django can verify."""
    if value.startswith(LEGACY_BCRYPT_PREFIXES):
        return "bcrypt$" + value
    return value


def parse_legacy_datetime(value):
    if not value:
        return None
    moment = parse_datetime(str(value))
    if moment is None:
        return None
    if timezone.is_naive(moment):
        moment = timezone.make_aware(moment, datetime.timezone.utc)
    return moment


def parse_legacy_time(value):
    if not value:
        return None
    text = str(value).strip()
    if len(text) == 5:
        text += ":00"
    try:
        _, moment = split_date_value(f"2000-01-01T{text}")
    except ValueError:
        logger.warning("Ignoring unparseable legacy event time %r", value)
        return None
    return moment


class Command(BaseCommand):
    help = "Import users, announcements, events and images from the previous board's SQLite database."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to the legacy database.db file")
        parser.add_argument(
            "--uploads-dir",
            default=None,
            help="Directory holding the legacy uploaded images",
        )

    def handle(self, *args, **options):
        path = options["path"]
        if not os.path.isfile(path):
            raise CommandError(f"Legacy database not found: {path}")

        connection = sqlite3.connect(path)
        connection.row_factory = sqlite3.Row
        try:
            tables = {
                row["name"]
                for row in connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
            }
            with transaction.atomic():
                users = self.import_users(connection) if "users" in tables else 0
                url_map = (
                    self.import_images(connection, options["uploads_dir"])
                    if "images" in tables
                    else {}
                )
                announcements = (
                    self.import_announcements(connection, url_map)
                    if "announcements" in tables
                    else 0
                )
                events = self.import_events(connection) if "events" in tables else 0
                drifted = recount_references()
        finally:
            connection.close()

        logger.info(
            "Legacy import from %s: %d users, %d images, %d announcements, %d events",
            path, users, len(set(url_map.values())), announcements, events,
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"Imported {users} user(s), {len(set(url_map.values()))} image(s), "
                f"{announcements} announcement(s), {events} event(s); "
                f"{len(drifted)} reference count(s) recomputed"
            )
        )

    def import_users(self, connection):
        User = get_user_model()
        imported = 0
        for row in connection.execute("SELECT * FROM users"):
            username = row["username"]
            if User.objects.filter(username=username).exists():
                self.stdout.write(f"Skipping existing user {username}")
                continue

            legacy_role = (row["role"] or "").lower()
            role = (
                UserRole.SUPER_ADMIN
                if legacy_role in LEGACY_SUPER_ADMIN_ROLES or username == settings.SUPER_ADMIN_USERNAME
                else UserRole.ADMIN
            )
            user = User(username=username, role=role, password=convert_legacy_password(row["password"] or ""))
            user.save()

            created_at = parse_legacy_datetime(row["createdAt"])
            if created_at:
                User.objects.filter(pk=user.pk).update(created_at=created_at, date_joined=created_at)
            imported += 1
        return imported

    def import_images(self, connection, uploads_dir):
        """
        Returns:
            dict mapping legacy url path -> new Image.url
        """
        url_map = {}
        if not uploads_dir:
            self.stdout.write(self.style.WARNING("--uploads-dir not given, legacy images are not copied"))
            return url_map

        for row in connection.execute("SELECT * FROM images"):
            source = os.path.join(uploads_dir, row["filename"])
            if not os.path.isfile(source):
                logger.warning("Legacy image file missing: %s", source)
                continue

            extension = os.path.splitext(row["filename"])[1].lower().lstrip(".")
            if extension not in settings.IMAGE_ALLOWED_EXTENSIONS:
                logger.warning("Skipping legacy image with unsupported type: %s", source)
                continue

            with open(source, "rb") as fh:
                data = fh.read()
            file_hash = hashlib.sha256(data).hexdigest()

            image = Image.objects.filter(hash=file_hash).first()
            if image is None:
                name = posixpath.join(settings.IMAGE_UPLOAD_SUBDIR, f"{uuid.uuid4().hex}.{extension}")
                saved_name = default_storage.save(name, ContentFile(data))
                image = Image.objects.create(
                    hash=file_hash,
                    filename=posixpath.basename(saved_name),
                    url=storage_url_path(saved_name),
                    size=len(data),
                    content_type=_guess_content_type(extension),
                )
                created_at = parse_legacy_datetime(row["createdAt"])
                if created_at:
                    Image.objects.filter(pk=image.pk).update(create_time=created_at)

            legacy_url = normalize_image_url(row["url"])
            if legacy_url:
                url_map[legacy_url] = image.url
        return url_map

    def import_announcements(self, connection, url_map):
        imported = 0
        for row in connection.execute("SELECT * FROM announcements"):
            keys = row.keys()
            created_at = parse_legacy_datetime(row["createdAt"])
            if Announcement.objects.filter(title=row["title"], create_time=created_at).exists():
                continue

            content = row["content"] or ""
            # Longest first so one legacy path never rewrites part of another
            for legacy_url in sorted(url_map, key=len, reverse=True):
                content = content.replace(legacy_url, url_map[legacy_url])

            announcement = Announcement(
                title=row["title"],
                content=content,
                category=row["category"],
                author=row["author"],
                is_published=bool(row["isPublished"]),
                scheduled_publish_at=parse_legacy_datetime(row["scheduledPublishAt"]),
                is_pinned=bool(row["isPinned"]),
                pinned_at=parse_legacy_datetime(row["pinnedAt"]),
                priority=row["priority"] if "priority" in keys and row["priority"] else 1,
                read_count=row["readCount"] if "readCount" in keys and row["readCount"] else 0,
            )
            announcement.save()

            Announcement.objects.filter(pk=announcement.pk).update(
                create_time=created_at or announcement.create_time,
                update_time=parse_legacy_datetime(row["updatedAt"]) or announcement.update_time,
            )
            imported += 1
        return imported

    def import_events(self, connection):
        imported = 0
        for row in connection.execute("SELECT * FROM events"):
            keys = row.keys()
            start_date, start_time = split_date_value(row["startDate"])
            end_date, end_time = split_date_value(row["endDate"])
            if "startTime" in keys and row["startTime"]:
                start_time = parse_legacy_time(row["startTime"])
            if "endTime" in keys and row["endTime"]:
                end_time = parse_legacy_time(row["endTime"])
            end_date = max(start_date, end_date)

            if Event.objects.filter(title=row["title"], start_date=start_date, end_date=end_date).exists():
                continue

            event = Event.objects.create(
                title=row["title"],
                description=row["description"] or "",
                start_date=start_date,
                end_date=end_date,
                start_time=start_time,
                end_time=end_time,
            )
            created_at = parse_legacy_datetime(row["createdAt"])
            if created_at:
                Event.objects.filter(pk=event.pk).update(create_time=created_at)
            imported += 1
        return imported


def _guess_content_type(extension):
    if extension == "jpg":
        return "image/jpeg"
    return f"image/{extension}"
