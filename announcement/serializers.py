from rest_framework import serializers

from .models import Announcement


class AnnouncementSerializer(serializers.ModelSerializer):
    """
    处理公告资料的序列化。

    `publish_status` 与 `pinned_at` 由模型根据 is_published、
    scheduled_publish_at 与 is_pinned 自动计算，不能直接写入。
    """

    class Meta:
        model = Announcement
        fields = (
            'id',
            'title',
            'content',
            'category',
            'author',
            'is_published',
            'scheduled_publish_at',
            'publish_status',
            'is_pinned',
            'pinned_at',
            'priority',
            'read_count',
            'create_user',
            'create_time',
            'update_time',
        )
        read_only_fields = (
            'id',
            'publish_status',
            'pinned_at',
            'read_count',
            'create_user',
            'create_time',
            'update_time',
        )

    def update(self, instance, validated_data):
        # Unpublishing without a new schedule returns the announcement to draft
        if validated_data.get('is_published') is False and 'scheduled_publish_at' not in validated_data:
            validated_data['scheduled_publish_at'] = None
        return super().update(instance, validated_data)
