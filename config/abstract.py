import uuid

from django.db import models
from django.conf import settings
from django.utils import timezone


class BaseModel(models.Model):
    """
    Abstract Model，包含创建者（create_user，可为空）、创建时间（create_time）和更新时间（update_time）。
    """

    create_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        verbose_name="创建者",
        related_name="%(app_label)s_%(class)s_ownership",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    create_time = models.DateTimeField(
        verbose_name="创建时间", auto_now_add=True, null=True, db_index=True
    )
    update_time = models.DateTimeField(
        verbose_name="更新时间", auto_now=True, null=True
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.update_time = timezone.now()
        super().save(*args, **kwargs)


class UUIDBaseModel(BaseModel):
    """
    BaseModel with an opaque UUID primary key, used for every board resource.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
