"""
URL configuration for the postboard project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/4.2/topics/http/urls/

Every API route accepts the path with or without a trailing slash.
"""

from django.contrib import admin
from django.urls import path, re_path, include
from announcement.views import (
    AnnouncementViewSet,
    AdminAnnouncementViewSet,
    CategoryListView,
)
from events.views import EventViewSet
from images.views import ImageUploadView, ImageViewSet
from scheduler.views import ExecutorView
from users.views import AdminViewSet
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)
from rest_framework import routers
from django.conf import settings
from django.conf.urls.static import static

router = routers.DefaultRouter(trailing_slash="/?")
router.register(r"announcements", AnnouncementViewSet, basename="announcements")
router.register(
    r"admin/announcements", AdminAnnouncementViewSet, basename="admin-announcements"
)
router.register(r"events", EventViewSet, basename="events")
router.register(r"images", ImageViewSet, basename="images")
router.register(r"admins", AdminViewSet, basename="admins")

urlpatterns = [
    path("api/", include(router.urls)),
    path("api/auth/", include("users.urls")),
    re_path(r"^api/upload/?$", ImageUploadView.as_view(), name="image-upload"),
    re_path(r"^api/categories/?$", CategoryListView.as_view(), name="categories"),
    re_path(
        r"^api/scheduler/execute/?$", ExecutorView.as_view(), name="scheduler-execute"
    ),
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]

urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
