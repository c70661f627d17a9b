"""
Filter sets for announcement models.
"""

import django_filters
from django.db.models import Q

from .enums import PublishStatus
from .models import Announcement


class AnnouncementFilterSet(django_filters.FilterSet):
    """
    Filter set for Announcement model.

    Supports filtering by:
    - keyword: case-insensitive match on title or content
    - category: exact match
    - publish_status: draft / scheduled / published (admin listing)
    - is_pinned: exact match
    - create_time: Date range filtering
    """

    keyword = django_filters.CharFilter(
        method="filter_keyword",
        help_text="关键字（匹配标题或内容）",
    )
    category = django_filters.CharFilter(field_name="category", lookup_expr="exact")
    publish_status = django_filters.ChoiceFilter(choices=PublishStatus.choices)
    is_pinned = django_filters.BooleanFilter()

    create_time__gte = django_filters.DateTimeFilter(
        field_name="create_time", lookup_expr="gte"
    )
    create_time__lte = django_filters.DateTimeFilter(
        field_name="create_time", lookup_expr="lte"
    )

    def filter_keyword(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(content__icontains=value))

    class Meta:
        model = Announcement
        fields = [
            "keyword",
            "category",
            "publish_status",
            "is_pinned",
        ]
