"""
Views for authentication and administrator management.

Identity always comes from a verified JWT. Administrator-account management
is restricted to the SUPER_ADMIN role.
"""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth.models import update_last_login
from rest_framework import status, serializers, viewsets, mixins
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiExample, inline_serializer

from .models import User
from .permissions import IsAdminRolePermission, IsSuperAdminRolePermission
from .serializers import (
    AdminCreateSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    LogoutSerializer,
    PasswordResetSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class LoginView(APIView):
    """
    Login with username and password and obtain JWT tokens.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        tags=['Authentication'],
        summary='Login and obtain JWT tokens (Public)',
        description="""
        Authenticate an administrator and obtain JWT access and refresh tokens.

        **Important Notes:**
        - Accounts imported from the previous board may still hold a plaintext
          password; it is accepted once and re-hashed immediately.
        - Use the access token as `Authorization: Bearer <access>`.
        """,
        request=LoginSerializer,
        examples=[
            OpenApiExample(
                'Login',
                value={'username': 'admin', 'password': 'SecurePass123!'},
                request_only=True,
            ),
        ],
        responses={
            200: OpenApiResponse(
                description='Login successful',
                response=inline_serializer(
                    name='LoginSuccessResponse',
                    fields={
                        'access': serializers.CharField(),
                        'refresh': serializers.CharField(),
                        'user': UserSerializer(),
                    }
                )
            ),
            400: OpenApiResponse(description='Missing username or password'),
            401: OpenApiResponse(description='Invalid credentials'),
        }
    )
    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
        if user is None:
            logger.info("Failed login attempt for username %s", serializer.validated_data['username'])
            return Response(
                {'error': '用户名或密码错误'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        refresh = RefreshToken.for_user(user)
        update_last_login(None, user)

        return Response(
            {
                'access': str(refresh.access_token),
                'refresh': str(refresh),
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK
        )


class LogoutView(APIView):
    """
    Logout view that blacklists the refresh token.

    POST /api/auth/logout/
    Requires authentication and accepts refresh token in request body.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = LogoutSerializer

    @extend_schema(
        tags=['Authentication'],
        summary='Logout and blacklist refresh token (Authenticated)',
        request=LogoutSerializer,
        responses={
            204: OpenApiResponse(description='Logout successful, token blacklisted'),
            400: OpenApiResponse(description='Invalid or missing refresh token'),
        }
    )
    def post(self, request):
        refresh_token = request.data.get('refresh')

        if not refresh_token:
            return Response(
                {'error': '缺少 refresh 令牌。'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
            return Response(status=status.HTTP_204_NO_CONTENT)
        except TokenError:
            return Response(
                {'error': '令牌无效或已失效。'},
                status=status.HTTP_400_BAD_REQUEST
            )


class ChangePasswordView(APIView):
    """
    Change the authenticated user's own password.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=['Authentication'],
        summary='Change own password (Authenticated)',
        request=ChangePasswordSerializer,
        responses={
            200: OpenApiResponse(description='Password changed'),
            400: OpenApiResponse(description='Missing fields or new password rejected'),
            401: OpenApiResponse(description='Old password is wrong'),
        }
    )
    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'user': request.user})
        serializer.is_valid(raise_exception=True)

        # authenticate() also accepts a legacy plaintext password
        user = authenticate(
            request,
            username=request.user.username,
            password=serializer.validated_data['old_password'],
        )
        if user is None:
            return Response(
                {'error': '原密码错误'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        user.set_password(serializer.validated_data['new_password'])
        user.save()
        logger.info("User %s changed their password", user.username)
        return Response({'message': '密码修改成功'}, status=status.HTTP_200_OK)


class AdminViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for managing administrator accounts.

    - List / Retrieve: GET /api/admins/ (any administrator)
    - Create: POST /api/admins/ (super admin)
    - Delete: DELETE /api/admins/{id}/ (super admin; super admin accounts are never deletable)
    - Reset password: PUT /api/admins/{id}/password/ (super admin)
    """

    queryset = User.objects.all().order_by("created_at")
    serializer_class = UserSerializer

    def get_permissions(self):
        if self.action in ["list", "retrieve"]:
            return [IsAuthenticated(), IsAdminRolePermission()]
        return [IsAuthenticated(), IsSuperAdminRolePermission()]

    def get_serializer_class(self):
        if self.action == "create":
            return AdminCreateSerializer
        if self.action == "set_password":
            return PasswordResetSerializer
        return UserSerializer

    @extend_schema(tags=['Administrators'], summary='Create administrator (Super admin)')
    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        logger.info(
            "Administrator %s created by %s",
            response.data.get('username'),
            request.user.username,
        )
        return response

    @extend_schema(
        tags=['Administrators'],
        summary='Delete administrator (Super admin)',
        responses={
            204: OpenApiResponse(description='Administrator deleted'),
            403: OpenApiResponse(description='Not a super admin, or target is a super admin'),
            404: OpenApiResponse(description='Administrator not found'),
        },
    )
    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        if instance.is_super_admin:
            return Response(
                {'error': '不能删除超级管理员账号'},
                status=status.HTTP_403_FORBIDDEN
            )
        username = instance.username
        self.perform_destroy(instance)
        logger.info("Administrator %s deleted by %s", username, request.user.username)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=['Administrators'],
        summary='Reset administrator password (Super admin)',
        request=PasswordResetSerializer,
        responses={
            200: OpenApiResponse(description='Password updated'),
            403: OpenApiResponse(description='Not a super admin'),
            404: OpenApiResponse(description='Administrator not found'),
        },
    )
    @action(detail=True, methods=["put"], url_path="password")
    def set_password(self, request, pk=None):
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        instance.set_password(serializer.validated_data['new_password'])
        instance.save()
        logger.info("Password of %s reset by %s", instance.username, request.user.username)
        return Response({'message': '密码修改成功'}, status=status.HTTP_200_OK)
