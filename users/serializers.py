"""
Serializers for User model and authentication.

Provides serializers for login, password management and administrator management.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from users.enums import UserRole

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Never exposes the password hash.
    """

    class Meta:
        model = User
        fields = (
            'id',
            'username',
            'role',
            'is_active',
            'last_login',
            'created_at',
            'updated_at',
        )
        read_only_fields = fields


class AdminCreateSerializer(serializers.ModelSerializer):
    """
    Serializer used by the super admin to create administrator accounts.
    """

    password = serializers.CharField(
        write_only=True,
        help_text='Initial password (write-only)'
    )
    role = serializers.ChoiceField(
        choices=UserRole.choices,
        default=UserRole.ADMIN,
        help_text='Role of the new account (defaults to ADMIN)'
    )

    class Meta:
        model = User
        fields = ('id', 'username', 'password', 'role', 'created_at')
        read_only_fields = ('id', 'created_at')

    def validate_password(self, value):
        validate_password(value)
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user

    def to_representation(self, instance):
        return UserSerializer(instance, context=self.context).data


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(help_text='Username')
    password = serializers.CharField(write_only=True, help_text='Password')


class ChangePasswordSerializer(serializers.Serializer):
    """
    Serializer for a user changing their own password.
    """

    old_password = serializers.CharField(write_only=True, help_text='Current password')
    new_password = serializers.CharField(write_only=True, help_text='New password')

    def validate_new_password(self, value):
        validate_password(value, user=self.context.get('user'))
        return value


class PasswordResetSerializer(serializers.Serializer):
    """
    Serializer for the super admin setting another administrator's password.
    """

    new_password = serializers.CharField(write_only=True, help_text='New password')

    def validate_new_password(self, value):
        validate_password(value)
        return value


class LogoutSerializer(serializers.Serializer):
    """
    Serializer for logout endpoint.

    Validates that a refresh token is provided for blacklisting.
    """

    refresh = serializers.CharField(
        required=True,
        help_text='Refresh token to be blacklisted'
    )
