import posixpath

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from config.abstract import UUIDBaseModel


class Image(UUIDBaseModel):
    """
    An uploaded image, stored once per distinct content hash.

    `reference_count` is the number of announcements whose content embeds
    `url`; it is only ever changed with single-statement F() updates.
    """

    hash = models.CharField(max_length=64, unique=True, verbose_name=_('SHA-256'))
    filename = models.CharField(max_length=255, verbose_name=_('文件名'))
    url = models.CharField(max_length=500, unique=True, verbose_name=_('访问路径'))
    reference_count = models.PositiveIntegerField(default=0, db_index=True, verbose_name=_('引用次数'))
    size = models.PositiveIntegerField(verbose_name=_('文件大小（字节）'))
    content_type = models.CharField(max_length=100, blank=True, verbose_name=_('MIME 类型'))

    class Meta:
        verbose_name = _('图片')
        verbose_name_plural = _('图片')
        ordering = ['-create_time']

    def __str__(self):
        return self.filename

    @property
    def storage_name(self):
        """Name of the backing file relative to MEDIA_ROOT."""
        return posixpath.join(settings.IMAGE_UPLOAD_SUBDIR, self.filename)
