from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from config.abstract import UUIDBaseModel


class Event(UUIDBaseModel):
    title = models.CharField(max_length=255, verbose_name=_('标题'))
    description = models.TextField(blank=True, default='', verbose_name=_('描述'))
    start_date = models.DateField(db_index=True, verbose_name=_('开始日期'))
    end_date = models.DateField(db_index=True, verbose_name=_('结束日期'))
    start_time = models.TimeField(blank=True, null=True, verbose_name=_('开始时间'))
    end_time = models.TimeField(blank=True, null=True, verbose_name=_('结束时间'))

    class Meta:
        verbose_name = _('活动')
        verbose_name_plural = _('活动')
        ordering = ['start_date', 'start_time', 'create_time']

    def __str__(self):
        return self.title

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({'end_date': _('结束日期不能早于开始日期')})
        if (
            self.start_date == self.end_date
            and self.start_time
            and self.end_time
            and self.end_time < self.start_time
        ):
            raise ValidationError({'end_time': _('结束时间不能早于开始时间')})
