"""
URL configuration for authentication endpoints (mounted under /api/auth/).
"""

from django.urls import re_path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import ChangePasswordView, LoginView, LogoutView

urlpatterns = [
    re_path(r'^login/?$', LoginView.as_view(), name='auth-login'),
    re_path(r'^refresh/?$', TokenRefreshView.as_view(), name='auth-refresh'),
    re_path(r'^logout/?$', LogoutView.as_view(), name='auth-logout'),
    re_path(r'^change-password/?$', ChangePasswordView.as_view(), name='auth-change-password'),
]
