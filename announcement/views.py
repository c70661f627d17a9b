from rest_framework import viewsets, mixins, filters, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiParameter
from django.db import DatabaseError
from django.db.models import F
from users.permissions import IsAdminRolePermission
from .enums import PublishStatus
from .models import Announcement
from .serializers import AnnouncementSerializer
from .filters import AnnouncementFilterSet
from .publishing import publish_due_announcements
from .read_tracking import ReadCooldown, get_client_address
from config.paginator import StandardResultsSetPagination
import logging

logger = logging.getLogger(__name__)

SCHEDULING_FIELDS = ("is_published", "scheduled_publish_at")


def run_opportunistic_publish(instance=None):
    """
    Run a publish pass right after an edit touched the scheduling fields, so
    an announcement scheduled in the past does not wait for the next tick.
    """
    try:
        published = publish_due_announcements()
    except DatabaseError:
        logger.exception("Opportunistic publish check failed")
        return
    if instance is not None and instance.pk in published:
        instance.refresh_from_db()


class AnnouncementViewSet(viewsets.ModelViewSet):
    """
    ViewSet for managing announcements.

    Provides CRUD operations for announcements:
    - List: GET /api/announcements/ (published only, `keyword` / `category` filters)
    - Create: POST /api/announcements/
    - Retrieve: GET /api/announcements/{id}/ (counts a read)
    - Update: PUT/PATCH /api/announcements/{id}/ (both merge over stored values)
    - Delete: DELETE /api/announcements/{id}/

    **Permissions:**
    - List and Retrieve: public (administrators can also retrieve unpublished rows)
    - Create, Update, Delete: Admin users only
    """

    queryset = Announcement.objects.all()
    serializer_class = AnnouncementSerializer
    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]
    filterset_class = AnnouncementFilterSet
    ordering_fields = [
        "title",
        "priority",
        "read_count",
        "create_time",
        "update_time",
    ]
    ordering = ["-is_pinned", "-priority", "-create_time"]
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        """
        Override to require admin permission for write operations.
        """
        if self.action in ["list", "retrieve"]:
            return [AllowAny()]
        return [IsAuthenticated(), IsAdminRolePermission()]

    def get_queryset(self):
        """
        The public list only ever shows published announcements; unpublished
        rows are reachable by id for administrators only.
        """
        queryset = super().get_queryset()
        if self.action == "list" or not IsAdminRolePermission().has_permission(self.request, self):
            queryset = queryset.filter(publish_status=PublishStatus.PUBLISHED)
        return queryset

    @extend_schema(
        tags=["Announcements"],
        summary="List published announcements (Public)",
        description="""
        获取已发布的公告列表，按 置顶、优先级、创建时间 排序。

        **查询参数：**
        - `keyword`: 关键字（可选，匹配标题或内容）
        - `category`: 分类（可选，精确匹配）
        - `page_size`: 每页数量（可选，不传则返回完整数组）
        """,
        parameters=[
            OpenApiParameter(
                name="keyword",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="关键字（匹配标题或内容）",
            ),
            OpenApiParameter(
                name="category",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="分类",
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        tags=["Announcements"],
        summary="Retrieve announcement (Public)",
        description="""
        获取公告详情并记录一次阅读。

        同一客户端在冷却时间（默认 60 秒）内重复阅读同一公告只计一次。
        非管理员访问未发布的公告返回 404。
        """,
        responses={
            200: AnnouncementSerializer,
            404: OpenApiResponse(description="公告不存在"),
        },
    )
    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()

        if ReadCooldown().should_count(get_client_address(request), instance.pk):
            Announcement.objects.filter(pk=instance.pk).update(read_count=F("read_count") + 1)
            instance.refresh_from_db(fields=["read_count"])

        serializer = self.get_serializer(instance)
        return Response(serializer.data)

    @extend_schema(
        tags=["Announcements"],
        summary="Create announcement (Admin)",
        description="""
        创建公告。`title`、`content`、`category`、`author` 为必填。

        - `is_published=true`：立即发布
        - 仅设置 `scheduled_publish_at`：定时发布
        - 都没有：草稿
        """,
        responses={
            201: AnnouncementSerializer,
            400: OpenApiResponse(description="缺少必填字段"),
            403: OpenApiResponse(description="权限不足"),
        },
    )
    def create(self, request, *args, **kwargs):
        return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        announcement = serializer.save(create_user=self.request.user)
        logger.info(
            "Announcement %s created by %s (%s)",
            announcement.pk,
            self.request.user.username,
            announcement.publish_status,
        )
        if any(field in serializer.validated_data for field in SCHEDULING_FIELDS):
            run_opportunistic_publish(announcement)

    @extend_schema(
        tags=["Announcements"],
        summary="Update announcement (Admin)",
        description="""
        更新公告。PUT 与 PATCH 都只更新请求中出现的字段，再与已保存的值合并后重新计算发布状态。
        `is_published=false` 且未提供 `scheduled_publish_at` 时回到草稿。
        """,
        responses={
            200: AnnouncementSerializer,
            400: OpenApiResponse(description="字段校验失败"),
            403: OpenApiResponse(description="权限不足"),
            404: OpenApiResponse(description="公告不存在"),
        },
    )
    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        announcement = serializer.save()
        logger.info("Announcement %s updated by %s", announcement.pk, self.request.user.username)
        if any(field in serializer.validated_data for field in SCHEDULING_FIELDS):
            run_opportunistic_publish(announcement)

    @extend_schema(
        tags=["Announcements"],
        summary="Delete announcement (Admin)",
        responses={
            204: OpenApiResponse(description="公告已删除"),
            403: OpenApiResponse(description="权限不足"),
            404: OpenApiResponse(description="公告不存在"),
        },
    )
    def destroy(self, request, *args, **kwargs):
        return super().destroy(request, *args, **kwargs)

    def perform_destroy(self, instance):
        pk = instance.pk
        instance.delete()
        logger.info("Announcement %s deleted by %s", pk, self.request.user.username)


class AdminAnnouncementViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Every announcement regardless of status, for the admin dashboard.

    - List: GET /api/admin/announcements/ (`publish_status`, `keyword`, `category` filters)
    """

    queryset = Announcement.objects.all()
    serializer_class = AnnouncementSerializer
    permission_classes = [IsAuthenticated, IsAdminRolePermission]
    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]
    filterset_class = AnnouncementFilterSet
    ordering_fields = AnnouncementViewSet.ordering_fields
    ordering = AnnouncementViewSet.ordering
    pagination_class = StandardResultsSetPagination

    @extend_schema(
        tags=["Announcements"],
        summary="List all announcements (Admin)",
        parameters=[
            OpenApiParameter(
                name="publish_status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=PublishStatus.values,
                description="发布状态",
            ),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)


class CategoryListView(APIView):
    """
    Distinct categories of published announcements, sorted.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Announcements"],
        summary="List categories (Public)",
        responses={200: OpenApiResponse(description="分类名称数组")},
    )
    def get(self, request, *args, **kwargs):
        categories = (
            Announcement.objects.filter(publish_status=PublishStatus.PUBLISHED)
            .order_by("category")
            .values_list("category", flat=True)
            .distinct()
        )
        return Response(list(categories), status=status.HTTP_200_OK)
