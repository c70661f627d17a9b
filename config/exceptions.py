"""
自定義異常處理器，用於將 Django REST Framework 的錯誤訊息轉換為中文。

此模組提供統一的錯誤處理機制：所有 API 錯誤回應都使用中文，
並且非欄位錯誤同時帶有 `error` 鍵，讓前端能以同一種方式讀取錯誤訊息。
"""

from rest_framework.views import exception_handler
from rest_framework import status
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
import logging

logger = logging.getLogger(__name__)

# 錯誤訊息對照表（英文 -> 中文）
ERROR_MESSAGES = {
    # 驗證錯誤
    "This field is required.": "此字段为必填项。",
    "This field may not be blank.": "此字段不能为空。",
    "This field may not be null.": "此字段不能为 null。",
    "A valid integer is required.": "请输入有效的整数。",
    "Must be a valid boolean.": "请输入有效的布尔值。",
    "No file was submitted.": "未提交文件。",
    "The submitted file is empty.": "提交的文件为空。",
    "A user with that username already exists.": "该用户名已被使用。",
    # 認證錯誤
    "Authentication credentials were not provided.": "未提供身份认证信息。",
    "Given token not valid for any token type": "令牌无效或已过期。",
    "Token is invalid or expired": "令牌无效或已过期。",
    "Token is blacklisted": "令牌已失效。",
    "No active account found with the given credentials": "用户名或密码错误。",
    # 權限錯誤
    "You do not have permission to perform this action.": "您没有执行此操作的权限。",
    # 其他錯誤
    "Not found.": "资源不存在。",
    "No Announcement matches the given query.": "公告不存在。",
    "No Event matches the given query.": "活动不存在。",
    "No Image matches the given query.": "图片不存在。",
    "No User matches the given query.": "管理员不存在。",
    'Method "{method}" not allowed.': '不允许使用 "{method}" 方法。',
    'Unsupported media type "{media_type}" in request.': '请求中不支持的媒体类型 "{media_type}"。',
    "JSON parse error - {detail}": "JSON 解析错误。",
}


def translate_error_message(message: str, **kwargs) -> str:
    """
    將英文錯誤訊息翻譯為中文。

    Args:
        message: 原始錯誤訊息
        **kwargs: 用於格式化訊息的參數

    Returns:
        翻譯後的中文錯誤訊息
    """
    # 先嘗試直接匹配
    if message in ERROR_MESSAGES:
        translated = ERROR_MESSAGES[message]
        if kwargs:
            try:
                return translated.format(**kwargs)
            except KeyError:
                return translated
        return translated

    # 嘗試匹配帶參數的訊息
    for en_msg, zh_msg in ERROR_MESSAGES.items():
        if "{" in en_msg:
            prefix = en_msg.split("{")[0]
            if prefix and message.startswith(prefix):
                try:
                    return zh_msg.format(**kwargs)
                except (KeyError, ValueError):
                    pass

    # 如果找不到對應的翻譯，返回原始訊息
    return message


def translate_validation_errors(errors):
    """
    遞迴翻譯驗證錯誤訊息。

    Args:
        errors: 錯誤字典或列表

    Returns:
        翻譯後的錯誤字典或列表
    """
    if isinstance(errors, dict):
        return {
            key: translate_validation_errors(value) for key, value in errors.items()
        }
    elif isinstance(errors, list):
        return [translate_validation_errors(error) for error in errors]
    elif isinstance(errors, str):
        return translate_error_message(errors)
    else:
        return errors


def custom_exception_handler(exc, context):
    """
    自定義異常處理器，將所有錯誤訊息轉換為中文。

    Args:
        exc: 異常實例
        context: 包含請求資訊的上下文字典

    Returns:
        Response 物件，包含中文錯誤訊息
    """
    # 調用 DRF 的預設異常處理器
    response = exception_handler(exc, context)

    if response is not None:
        data = response.data

        if isinstance(data, dict):
            translated_data = translate_validation_errors(data)
            # 非欄位錯誤（detail）同時放進 error，前端統一讀取 error
            if "detail" in translated_data and "error" not in translated_data:
                translated_data["error"] = translated_data["detail"]
        elif isinstance(data, list):
            translated_data = {
                "error": translate_error_message(str(data[0])) if data else "",
                "errors": [translate_error_message(str(item)) for item in data],
            }
        else:
            translated_data = {"error": translate_error_message(str(data))}

        response.data = translated_data

    # 處理 Django 的 ValidationError
    elif isinstance(exc, DjangoValidationError):
        error_dict = (
            exc.message_dict if hasattr(exc, "message_dict") else {"error": exc.messages}
        )
        translated_dict = translate_validation_errors(error_dict)
        response = Response(translated_dict, status=status.HTTP_400_BAD_REQUEST)

    # 處理資料庫完整性錯誤
    elif isinstance(exc, IntegrityError):
        error_msg = str(exc)
        logger.warning("Integrity error in %s: %s", context.get("view"), error_msg)
        if "UNIQUE constraint" in error_msg or "duplicate key" in error_msg:
            translated_msg = "数据已存在，无法重复创建。"
        elif "FOREIGN KEY constraint" in error_msg:
            translated_msg = "关联数据不存在。"
        else:
            translated_msg = "数据完整性错误，请检查输入数据。"
        response = Response(
            {"error": translated_msg, "detail": error_msg},
            status=status.HTTP_400_BAD_REQUEST,
        )

    return response
