from django.contrib import admin

from .models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = (
        'title',
        'category',
        'author',
        'publish_status',
        'scheduled_publish_at',
        'is_pinned',
        'priority',
        'read_count',
        'create_time',
    )
    list_filter = ('publish_status', 'category', 'is_pinned', 'priority')
    search_fields = ('title', 'content', 'author')
    ordering = ('-is_pinned', '-priority', '-create_time')
    readonly_fields = ('publish_status', 'pinned_at', 'read_count', 'create_user', 'create_time', 'update_time')

    def save_model(self, request, obj, form, change):
        if not change and obj.create_user is None:
            obj.create_user = request.user
        super().save_model(request, obj, form, change)
