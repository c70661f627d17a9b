from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework.permissions import BasePermission

from users.enums import UserRole


class IsAdminRolePermission(BasePermission):
    """
    Permission to check if the user has a admin role (super admin, admin).
    """
    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, "role", None) in [
                UserRole.SUPER_ADMIN,
                UserRole.ADMIN,
            ]
        )


class IsSuperAdminRolePermission(BasePermission):
    """
    Permission for administrator-account management (create, delete, reset password).
    """
    message = "只有超级管理员可以执行此操作。"

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, "role", None) == UserRole.SUPER_ADMIN
        )


class CustomTokenPermission(BasePermission):
    """
    Shared-secret permission for machine callers such as an external cron.

    The caller sends the token in the `X-Scheduler-Token` header; an empty
    SCHEDULER_API_TOKEN setting denies every request.
    """
    def has_permission(self, request, view):
        expected = getattr(settings, "SCHEDULER_API_TOKEN", "")
        provided = request.headers.get("X-Scheduler-Token", "")
        return bool(expected) and constant_time_compare(provided, expected)
