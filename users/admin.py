"""
Admin interface configuration for User model.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth import get_user_model

User = get_user_model()

admin.site.site_header = "Postboard 后台"
admin.site.site_title = "Postboard 后台"
admin.site.index_title = "Postboard"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom admin interface for User model."""

    list_display = (
        'username',
        'role',
        'is_staff',
        'is_active',
        'last_login',
        'created_at',
    )

    list_filter = (
        'role',
        'is_staff',
        'is_active',
        'created_at',
    )

    search_fields = ('username',)

    ordering = ('-created_at',)

    readonly_fields = ('created_at', 'updated_at', 'last_login', 'date_joined')

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Board', {'fields': ('role', 'created_at', 'updated_at')}),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Board', {'fields': ('role',)}),
    )
