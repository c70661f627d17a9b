import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import filters, status, viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.permissions import IsAdminRolePermission
from .filters import ImageFilterSet
from .models import Image
from .serializers import ImageSerializer, ImageUploadSerializer
from .uploads import ImageUploadError, store_image

logger = logging.getLogger(__name__)


class ImageUploadView(APIView):
    """
    Upload an image to embed in announcement content.

    POST /api/upload/ with the multipart field `image`.
    """

    permission_classes = [IsAuthenticated, IsAdminRolePermission]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        tags=["Images"],
        summary="Upload image (Admin)",
        description="""
        上传图片。内容相同的图片只会保存一份：

        - 新图片：返回 201
        - 已存在相同内容（SHA-256 相同）：返回 200 与已有图片，不会写入新文件
        """,
        request={"multipart/form-data": ImageUploadSerializer},
        responses={
            200: OpenApiResponse(response=ImageSerializer, description="已存在相同图片"),
            201: OpenApiResponse(response=ImageSerializer, description="上传成功"),
            400: OpenApiResponse(description="缺少文件、格式不支持或文件过大"),
        },
    )
    def post(self, request, *args, **kwargs):
        try:
            image, created = store_image(request.FILES.get("image"), user=request.user)
        except ImageUploadError as e:
            logger.info("Rejected image upload from %s: %s", request.user.username, e)
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        serializer = ImageSerializer(image, context={"request": request})
        return Response(
            serializer.data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class ImageViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only listing of stored images with their reference counts.

    - List: GET /api/images/ (`?orphaned=true` for unreferenced images)
    - Retrieve: GET /api/images/{id}/
    """

    queryset = Image.objects.all()
    serializer_class = ImageSerializer
    permission_classes = [IsAuthenticated, IsAdminRolePermission]
    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]
    filterset_class = ImageFilterSet
    ordering_fields = ["create_time", "reference_count", "size"]
    ordering = ["-create_time"]

    @extend_schema(tags=["Images"], summary="List images (Admin)")
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(tags=["Images"], summary="Retrieve image (Admin)")
    def retrieve(self, request, *args, **kwargs):
        return super().retrieve(request, *args, **kwargs)
