from rest_framework import viewsets, filters
from rest_framework.permissions import AllowAny, IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiResponse
from users.permissions import IsAdminRolePermission
from .models import Event
from .serializers import EventSerializer
from .filters import EventFilterSet
from config.paginator import StandardResultsSetPagination
import logging

logger = logging.getLogger(__name__)


class EventViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the event calendar.

    - List: GET /api/events/ (`start` / `end` overlap filter)
    - Create: POST /api/events/
    - Retrieve: GET /api/events/{id}/
    - Update: PUT/PATCH /api/events/{id}/
    - Delete: DELETE /api/events/{id}/

    **Permissions:**
    - List and Retrieve: public
    - Create, Update, Delete: Admin users only
    """

    queryset = Event.objects.all()
    serializer_class = EventSerializer
    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
        filters.SearchFilter,
    ]
    filterset_class = EventFilterSet
    ordering_fields = ["start_date", "end_date", "create_time"]
    ordering = ["start_date", "start_time", "create_time"]
    search_fields = ["title", "description"]
    pagination_class = StandardResultsSetPagination

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [AllowAny()]
        return [IsAuthenticated(), IsAdminRolePermission()]

    @extend_schema(tags=["Events"], summary="List events (Public)")
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=["Events"], summary="Retrieve event (Public)")
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)

    @extend_schema(
        tags=["Events"],
        summary="Create event (Admin)",
        responses={
            201: EventSerializer,
            400: OpenApiResponse(description="缺少必填字段或结束日期早于开始日期"),
        },
    )
    def create(self, request, *args, **kwargs):
        return super().create(request, *args, **kwargs)

    def perform_create(self, serializer):
        event = serializer.save(create_user=self.request.user)
        logger.info("Event %s created by %s", event.pk, self.request.user.username)

    @extend_schema(tags=["Events"], summary="Update event (Admin)")
    def update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def perform_update(self, serializer):
        event = serializer.save()
        logger.info("Event %s updated by %s", event.pk, self.request.user.username)

    @extend_schema(tags=["Events"], summary="Delete event (Admin)")
    def destroy(self, request, *args, **kwargs):
        return super().destroy(request, *args, **kwargs)

    def perform_destroy(self, instance):
        pk = instance.pk
        instance.delete()
        logger.info("Event %s deleted by %s", pk, self.request.user.username)
