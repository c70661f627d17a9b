import uuid

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
            name='Image',
            fields=[
                ('create_time', models.DateTimeField(auto_now_add=True, db_index=True, null=True, verbose_name='创建时间')),
                ('update_time', models.DateTimeField(auto_now=True, null=True, verbose_name='更新时间')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('hash', models.CharField(max_length=64, unique=True, verbose_name='SHA-256')),
                ('filename', models.CharField(max_length=255, verbose_name='文件名')),
                ('url', models.CharField(max_length=500, unique=True, verbose_name='访问路径')),
                ('reference_count', models.PositiveIntegerField(db_index=True, default=0, verbose_name='引用次数')),
                ('size', models.PositiveIntegerField(verbose_name='文件大小（字节）')),
                ('content_type', models.CharField(blank=True, max_length=100, verbose_name='MIME 类型')),
                ('create_user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='%(app_label)s_%(class)s_ownership', to=settings.AUTH_USER_MODEL, verbose_name='创建者')),
            ],
            options={
                'verbose_name': '图片',
                'verbose_name_plural': '图片',
                'ordering': ['-create_time'],
            },
        ),
    ]
