from django.contrib import admin

from .models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('title', 'start_date', 'start_time', 'end_date', 'end_time', 'create_time')
    list_filter = ('start_date',)
    search_fields = ('title', 'description')
    date_hierarchy = 'start_date'
    ordering = ('start_date', 'start_time')
    readonly_fields = ('create_user', 'create_time', 'update_time')
