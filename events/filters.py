"""
Filter sets for the Event model.
"""

import django_filters

from .models import Event


class EventFilterSet(django_filters.FilterSet):
    """
    Supports filtering by:
    - start / end: events overlapping the [start, end] day range (either bound optional)
    """

    start = django_filters.DateFilter(
        field_name="end_date",
        lookup_expr="gte",
        help_text="区间开始日期（返回结束日期不早于此日期的活动）",
    )
    end = django_filters.DateFilter(
        field_name="start_date",
        lookup_expr="lte",
        help_text="区间结束日期（返回开始日期不晚于此日期的活动）",
    )

    class Meta:
        model = Event
        fields = ["start", "end"]
