from django.contrib import admin

from .models import Image


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin):
    list_display = ('filename', 'url', 'reference_count', 'size', 'content_type', 'create_time')
    list_filter = ('content_type', 'create_time')
    search_fields = ('filename', 'url', 'hash')
    ordering = ('-create_time',)
    # Counts are maintained by the announcement signals and the recount command
    readonly_fields = (
        'id', 'hash', 'filename', 'url', 'reference_count', 'size', 'content_type',
        'create_user', 'create_time', 'update_time',
    )

    def has_add_permission(self, request):
        return False
