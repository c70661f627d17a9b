"""
Filter sets for the Image model.
"""

import django_filters

from .models import Image


class ImageFilterSet(django_filters.FilterSet):
    """
    Supports filtering by:
    - orphaned: true lists images no announcement references
    - create_time: Date range filtering
    """

    orphaned = django_filters.BooleanFilter(
        method="filter_orphaned",
        help_text="true：只看未被引用的图片；false：只看被引用的图片",
    )
    create_time__gte = django_filters.DateTimeFilter(field_name="create_time", lookup_expr="gte")
    create_time__lte = django_filters.DateTimeFilter(field_name="create_time", lookup_expr="lte")

    def filter_orphaned(self, queryset, name, value):
        if value:
            return queryset.filter(reference_count=0)
        return queryset.filter(reference_count__gt=0)

    class Meta:
        model = Image
        fields = ["orphaned", "content_type"]
