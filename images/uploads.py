"""
Content-addressed image upload.

Every check runs before anything touches disk. Identical bytes map to one
Image row and one file, identified by the SHA-256 of the content.
"""

import hashlib
import logging
import os
import posixpath
import uuid
from urllib.parse import urlsplit

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import DatabaseError, IntegrityError, transaction

from images.models import Image

logger = logging.getLogger(__name__)


class ImageUploadError(Exception):
    """Raised when an upload is rejected before it is stored."""


def validate_upload(uploaded_file):
    """
    Check extension, MIME type and size.

    Returns:
        (extension, content_type)
    """
    if uploaded_file is None:
        raise ImageUploadError("请选择要上传的图片")

    extension = os.path.splitext(uploaded_file.name or "")[1].lower().lstrip(".")
    if extension not in settings.IMAGE_ALLOWED_EXTENSIONS:
        allowed = ", ".join(sorted(settings.IMAGE_ALLOWED_EXTENSIONS))
        raise ImageUploadError(f"不支持的图片格式，仅支持：{allowed}")

    content_type = getattr(uploaded_file, "content_type", None) or ""
    if not content_type.startswith("image/"):
        raise ImageUploadError("只能上传图片文件")

    if uploaded_file.size == 0:
        raise ImageUploadError("提交的文件为空。")
    if uploaded_file.size > settings.IMAGE_MAX_UPLOAD_SIZE:
        limit_mb = settings.IMAGE_MAX_UPLOAD_SIZE // (1024 * 1024)
        raise ImageUploadError(f"图片大小不能超过 {limit_mb}MB")

    return extension, content_type


def storage_url_path(name):
    """
    Path part of the public url of a stored file.

    Image.url keeps this form so it matches what extraction produces from
    content, whether MEDIA_URL is a path or an absolute CDN url.
    """
    return urlsplit(default_storage.url(name)).path


def compute_hash(uploaded_file):
    digest = hashlib.sha256()
    for chunk in uploaded_file.chunks():
        digest.update(chunk)
    return digest.hexdigest()


def store_image(uploaded_file, user=None):
    """
    Store an uploaded image unless identical content is already stored.

    Returns:
        (image, created): `created` is False when an existing Image with the
        same hash was returned and nothing was written.
    """
    extension, content_type = validate_upload(uploaded_file)
    file_hash = compute_hash(uploaded_file)

    existing = Image.objects.filter(hash=file_hash).first()
    if existing is not None:
        logger.info("Upload of %s matched existing image %s", uploaded_file.name, existing.url)
        return existing, False

    name = posixpath.join(settings.IMAGE_UPLOAD_SUBDIR, f"{uuid.uuid4().hex}.{extension}")
    saved_name = default_storage.save(name, uploaded_file)

    try:
        with transaction.atomic():
            image = Image.objects.create(
                hash=file_hash,
                filename=posixpath.basename(saved_name),
                url=storage_url_path(saved_name),
                size=uploaded_file.size,
                content_type=content_type,
                create_user=user,
            )
    except IntegrityError:
        default_storage.delete(saved_name)
        # A concurrent upload of the same bytes won the unique-hash race
        winner = Image.objects.filter(hash=file_hash).first()
        if winner is None:
            raise
        return winner, False
    except DatabaseError:
        default_storage.delete(saved_name)
        logger.exception("Failed to record uploaded image %s; removed %s", uploaded_file.name, saved_name)
        raise

    logger.info("Stored image %s (%d bytes)", image.url, image.size)
    return image, True
