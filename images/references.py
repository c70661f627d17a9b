"""
Image reference counting.

References are scraped from announcement content: `<img src="...">` tags and
markdown `![alt](url "title")` images. Counting uses set semantics, so a url
embedded several times in one announcement is one reference, on create,
update and delete alike.
"""

import html
import logging
import re
from collections import Counter
from urllib.parse import urlsplit

from django.db.models import F
from django.utils import timezone

from images.models import Image

logger = logging.getLogger(__name__)

IMG_TAG_SRC_PATTERN = re.compile(
    r"""<img\b[^>]*?\bsrc\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
    re.IGNORECASE,
)
MARKDOWN_IMAGE_PATTERN = re.compile(
    r"""!\[[^\]]*\]\(\s*<?([^\s()<>]+)>?(?:\s+(?:"[^"]*"|'[^']*'|\([^)]*\)))?\s*\)"""
)


def normalize_image_url(url):
    """
    Reduce an embedded url to the form stored in Image.url.

    Absolute http(s) urls are matched on their path so content pasted with the
    API host still refers to the same image. Returns None for data: urls and
    empty values.
    """
    url = html.unescape(url or "").strip()
    if not url:
        return None
    parts = urlsplit(url)
    if parts.scheme == "data":
        return None
    return parts.path or None


def extract_image_urls(content):
    """Return the set of image urls referenced by `content`."""
    if not content:
        return set()

    urls = set()
    for match in IMG_TAG_SRC_PATTERN.finditer(content):
        raw = next(group for group in match.groups() if group is not None)
        url = normalize_image_url(raw)
        if url:
            urls.add(url)
    for match in MARKDOWN_IMAGE_PATTERN.finditer(content):
        url = normalize_image_url(match.group(1))
        if url:
            urls.add(url)
    return urls


def increment_references(urls):
    """Add one reference to every known image in `urls`."""
    if not urls:
        return 0
    updated = Image.objects.filter(url__in=list(urls)).update(
        reference_count=F("reference_count") + 1,
        update_time=timezone.now(),
    )
    logger.debug("Incremented references of %d image(s)", updated)
    return updated


def decrement_references(urls):
    """Remove one reference from every known image in `urls`, never below zero."""
    if not urls:
        return 0
    updated = Image.objects.filter(url__in=list(urls), reference_count__gt=0).update(
        reference_count=F("reference_count") - 1,
        update_time=timezone.now(),
    )
    logger.debug("Decremented references of %d image(s)", updated)
    return updated


def apply_content_change(old_content, new_content):
    """
    Move references from the urls only `old_content` embeds to the urls only
    `new_content` embeds. Urls present in both are left alone.
    """
    if old_content == new_content:
        return
    old_urls = extract_image_urls(old_content)
    new_urls = extract_image_urls(new_content)
    decrement_references(old_urls - new_urls)
    increment_references(new_urls - old_urls)


def recount_references(dry_run=False):
    """
    Recompute every Image.reference_count from the live announcements.

    Returns:
        list of (image, stored_count, actual_count) for the rows that drifted
    """
    from announcement.models import Announcement

    actual = Counter()
    for content in Announcement.objects.values_list("content", flat=True).iterator():
        actual.update(extract_image_urls(content))

    drifted = []
    for image in Image.objects.all().iterator():
        expected = actual.get(image.url, 0)
        if image.reference_count == expected:
            continue
        drifted.append((image, image.reference_count, expected))
        if not dry_run:
            Image.objects.filter(pk=image.pk).update(reference_count=expected)
            logger.info(
                "Reference count of %s corrected from %d to %d",
                image.url,
                image.reference_count,
                expected,
            )
    return drifted
