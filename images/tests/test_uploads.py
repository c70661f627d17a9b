"""
Tests for POST /api/upload/ and the upload service.
"""

import hashlib

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status

from images.models import Image
from images.uploads import ImageUploadError, store_image

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def png_file(name="photo.png", content=PNG_BYTES, content_type="image/png"):
    return SimpleUploadedFile(name, content, content_type=content_type)


def stored_files(media_root):
    upload_dir = media_root / "uploads"
    if not upload_dir.exists():
        return []
    return sorted(p.name for p in upload_dir.iterdir())


@pytest.mark.django_db
class TestUploadEndpoint:

    def test_new_upload_returns_201(self, admin_client, media_root):
        response = admin_client.post('/api/upload/', {'image': png_file()}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['url'].startswith('/media/uploads/')
        assert response.data['url'].endswith('.png')
        assert response.data['absolute_url'] == f"http://testserver{response.data['url']}"
        assert response.data['hash'] == hashlib.sha256(PNG_BYTES).hexdigest()
        assert response.data['size'] == len(PNG_BYTES)
        assert response.data['reference_count'] == 0
        assert stored_files(media_root) == [response.data['url'].rsplit('/', 1)[-1]]

    def test_duplicate_upload_returns_existing_image(self, admin_client, media_root):
        first = admin_client.post('/api/upload/', {'image': png_file()}, format='multipart')
        second = admin_client.post(
            '/api/upload/', {'image': png_file(name="copy.png")}, format='multipart'
        )

        assert second.status_code == status.HTTP_200_OK
        assert second.data['id'] == first.data['id']
        assert second.data['url'] == first.data['url']
        assert Image.objects.count() == 1
        assert len(stored_files(media_root)) == 1

    def test_missing_file_returns_400(self, admin_client, media_root):
        response = admin_client.post('/api/upload/', {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_unsupported_extension_returns_400(self, admin_client, media_root):
        response = admin_client.post(
            '/api/upload/', {'image': png_file(name="notes.txt")}, format='multipart'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert stored_files(media_root) == []

    def test_non_image_mime_type_returns_400(self, admin_client, media_root):
        response = admin_client.post(
            '/api/upload/',
            {'image': png_file(content_type="application/octet-stream")},
            format='multipart',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert stored_files(media_root) == []

    def test_oversized_file_returns_400(self, admin_client, media_root, settings):
        settings.IMAGE_MAX_UPLOAD_SIZE = 16

        response = admin_client.post('/api/upload/', {'image': png_file()}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Image.objects.count() == 0
        assert stored_files(media_root) == []

    def test_anonymous_upload_is_rejected(self, api_client, media_root):
        response = api_client.post('/api/upload/', {'image': png_file()}, format='multipart')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_upload_without_trailing_slash(self, admin_client, media_root):
        response = admin_client.post('/api/upload', {'image': png_file()}, format='multipart')
        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestStoreImage:

    def test_records_uploader_and_content_type(self, admin_user, media_root):
        image, created = store_image(png_file(name="logo.PNG"), user=admin_user)

        assert created is True
        assert image.create_user == admin_user
        assert image.content_type == "image/png"
        assert image.filename.endswith(".png")

    def test_svg_is_rejected(self, media_root):
        svg = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'

        with pytest.raises(ImageUploadError):
            store_image(png_file(name="icon.svg", content=svg, content_type="image/svg+xml"))

        assert stored_files(media_root) == []

    def test_empty_file_is_rejected(self, media_root):
        with pytest.raises(ImageUploadError):
            store_image(png_file(content=b""))

    def test_failed_insert_removes_written_file(self, media_root, monkeypatch):
        from django.db import DatabaseError

        def broken_create(**kwargs):
            raise DatabaseError("disk I/O error")

        monkeypatch.setattr(Image.objects, "create", broken_create)

        with pytest.raises(DatabaseError):
            store_image(png_file())

        assert stored_files(media_root) == []


@pytest.mark.django_db
class TestAbsoluteMediaUrl:

    @pytest.fixture(autouse=True)
    def cdn_media_url(self, settings):
        settings.MEDIA_URL = "https://cdn.example.com/media/"

    def test_stored_url_is_the_path(self, admin_client, media_root):
        response = admin_client.post('/api/upload/', {'image': png_file()}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['url'].startswith('/media/uploads/')
        assert response.data['absolute_url'] == f"https://cdn.example.com{response.data['url']}"

    def test_embedded_cdn_url_counts_as_reference(self, admin_client, media_root):
        upload = admin_client.post('/api/upload/', {'image': png_file()}, format='multipart')

        admin_client.post(
            '/api/announcements/',
            {
                'title': '外链图片',
                'content': f"![]({upload.data['absolute_url']})",
                'category': '通知',
                'author': '管理员',
            },
            format='json',
        )

        assert Image.objects.get(pk=upload.data['id']).reference_count == 1
