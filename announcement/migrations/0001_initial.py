import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('create_time', models.DateTimeField(auto_now_add=True, db_index=True, null=True, verbose_name='创建时间')),
                ('update_time', models.DateTimeField(auto_now=True, null=True, verbose_name='更新时间')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=255, verbose_name='标题')),
                ('content', models.TextField(help_text='Markdown / HTML，可内嵌图片', verbose_name='内容')),
                ('category', models.CharField(db_index=True, max_length=100, verbose_name='分类')),
                ('author', models.CharField(max_length=100, verbose_name='发布人')),
                ('is_published', models.BooleanField(default=False, verbose_name='是否发布')),
                ('scheduled_publish_at', models.DateTimeField(blank=True, null=True, verbose_name='定时发布时间')),
                ('publish_status', models.CharField(choices=[('draft', '草稿'), ('scheduled', '定时发布'), ('published', '已发布')], db_index=True, default='draft', max_length=20, verbose_name='发布状态')),
                ('is_pinned', models.BooleanField(default=False, verbose_name='是否置顶')),
                ('pinned_at', models.DateTimeField(blank=True, null=True, verbose_name='置顶时间')),
                ('priority', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)], verbose_name='优先级')),
                ('read_count', models.PositiveIntegerField(default=0, verbose_name='阅读次数')),
                ('create_user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='%(app_label)s_%(class)s_ownership', to=settings.AUTH_USER_MODEL, verbose_name='创建者')),
            ],
            options={
                'verbose_name': '公告',
                'verbose_name_plural': '公告',
                'ordering': ['-is_pinned', '-priority', '-create_time'],
                'indexes': [models.Index(fields=['publish_status', 'scheduled_publish_at'], name='announcement_due_idx')],
            },
        ),
    ]
