from urllib.parse import urlsplit

from django.core.files.storage import default_storage
from rest_framework import serializers

from .models import Image


class ImageSerializer(serializers.ModelSerializer):
    """
    Image metadata. `url` is the path form matched against content;
    `absolute_url` is the full public url (MEDIA_URL host, or the API host
    when MEDIA_URL is a path).
    """

    absolute_url = serializers.SerializerMethodField()

    class Meta:
        model = Image
        fields = (
            'id',
            'url',
            'absolute_url',
            'filename',
            'hash',
            'size',
            'content_type',
            'reference_count',
            'create_time',
            'update_time',
        )
        read_only_fields = fields

    def get_absolute_url(self, obj) -> str:
        public_url = default_storage.url(obj.storage_name)
        request = self.context.get('request')
        if urlsplit(public_url).scheme or request is None:
            return public_url
        return request.build_absolute_uri(public_url)


class ImageUploadSerializer(serializers.Serializer):
    """Request body of POST /api/upload/ (multipart)."""

    image = serializers.FileField(help_text='图片文件（jpg、png、gif、webp、bmp，最大 5MB）')
