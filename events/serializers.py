from collections.abc import Mapping

from rest_framework import serializers

from .dates import split_date_value
from .models import Event


class EventSerializer(serializers.ModelSerializer):
    """
    活动日历的序列化。

    `start_date` / `end_date` 接受日期或完整的 ISO 时间。
    请求中完全没有 `start_time` / `end_time` 键时才取 ISO 时间中的时刻；
    键存在但为空字符串表示全天活动（时间为 null）。
    """

    class Meta:
        model = Event
        fields = (
            'id',
            'title',
            'description',
            'start_date',
            'end_date',
            'start_time',
            'end_time',
            'create_time',
            'update_time',
        )
        read_only_fields = ('id', 'create_time', 'update_time')

    def to_internal_value(self, data):
        if not isinstance(data, Mapping):
            return super().to_internal_value(data)
        data = data.dict() if hasattr(data, 'dict') else dict(data)

        for time_field in ('start_time', 'end_time'):
            value = data.get(time_field)
            if isinstance(value, str) and not value.strip():
                data[time_field] = None

        errors = {}
        for date_field, time_field in (('start_date', 'start_time'), ('end_date', 'end_time')):
            value = data.get(date_field)
            if not isinstance(value, str) or not value.strip():
                continue
            try:
                day, moment = split_date_value(value)
            except ValueError:
                errors[date_field] = ['日期格式无效，请使用 YYYY-MM-DD 或 ISO 8601 时间。']
                continue
            data[date_field] = day.isoformat()
            if moment is not None and time_field not in data:
                data[time_field] = moment.isoformat()

        if errors:
            raise serializers.ValidationError(errors)
        return super().to_internal_value(data)

    def validate(self, attrs):
        def current(name):
            if name in attrs:
                return attrs[name]
            return getattr(self.instance, name, None)

        start_date, end_date = current('start_date'), current('end_date')
        start_time, end_time = current('start_time'), current('end_time')

        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({'end_date': '结束日期不能早于开始日期'})
        if start_date == end_date and start_time and end_time and end_time < start_time:
            raise serializers.ValidationError({'end_time': '结束时间不能早于开始时间'})
        return attrs
