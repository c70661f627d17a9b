"""
Tests for the Chinese error translation layer.
"""

import pytest
from rest_framework import status

from config.exceptions import translate_error_message, translate_validation_errors


class TestTranslateErrorMessage:

    def test_known_message(self):
        assert translate_error_message("This field is required.") == "此字段为必填项。"

    def test_templated_message(self):
        assert translate_error_message('Method "DELETE" not allowed.', method="DELETE") == '不允许使用 "DELETE" 方法。'

    def test_unknown_message_is_returned_unchanged(self):
        assert translate_error_message("Something else") == "Something else"

    def test_nested_errors(self):
        errors = {"title": ["This field is required."], "meta": {"detail": "Not found."}}

        assert translate_validation_errors(errors) == {
            "title": ["此字段为必填项。"],
            "meta": {"detail": "资源不存在。"},
        }


@pytest.mark.django_db
class TestCustomExceptionHandler:

    def test_unauthenticated_error_is_translated_and_mirrored(self, api_client):
        response = api_client.post('/api/announcements/', {}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['detail'] == "未提供身份认证信息。"
        assert response.data['error'] == response.data['detail']

    def test_not_found_is_translated(self, api_client):
        response = api_client.get('/api/events/00000000-0000-0000-0000-000000000000/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] in ("活动不存在。", "资源不存在。")

    def test_field_errors_keep_their_keys(self, admin_client):
        response = admin_client.post('/api/announcements/', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['title'] == ["此字段为必填项。"]
