from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from config.abstract import UUIDBaseModel
from announcement.enums import PublishStatus
from announcement.publishing import resolve_publish_state


class Announcement(UUIDBaseModel):
    title = models.CharField(max_length=255, verbose_name=_('标题'))
    content = models.TextField(verbose_name=_('内容'), help_text=_('Markdown / HTML，可内嵌图片'))
    category = models.CharField(max_length=100, db_index=True, verbose_name=_('分类'))
    author = models.CharField(max_length=100, verbose_name=_('发布人'))
    is_published = models.BooleanField(default=False, verbose_name=_('是否发布'))
    scheduled_publish_at = models.DateTimeField(blank=True, null=True, verbose_name=_('定时发布时间'))
    publish_status = models.CharField(
        max_length=20,
        choices=PublishStatus.choices,
        default=PublishStatus.DRAFT,
        db_index=True,
        verbose_name=_('发布状态'),
    )
    is_pinned = models.BooleanField(default=False, verbose_name=_('是否置顶'))
    pinned_at = models.DateTimeField(blank=True, null=True, verbose_name=_('置顶时间'))
    priority = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name=_('优先级'),
    )
    read_count = models.PositiveIntegerField(default=0, verbose_name=_('阅读次数'))

    class Meta:
        verbose_name = _('公告')
        verbose_name_plural = _('公告')
        ordering = ['-is_pinned', '-priority', '-create_time']
        indexes = [
            models.Index(fields=['publish_status', 'scheduled_publish_at'], name='announcement_due_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        self.is_published, self.scheduled_publish_at, self.publish_status = resolve_publish_state(
            self.is_published, self.scheduled_publish_at
        )
        if self.is_pinned and self.pinned_at is None:
            self.pinned_at = timezone.now()
        elif not self.is_pinned:
            self.pinned_at = None
        super().save(*args, **kwargs)
