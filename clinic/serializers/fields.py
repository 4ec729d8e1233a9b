import datetime

from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework import serializers


class LenientDateField(serializers.DateField):
    """A date field that also accepts full ISO datetimes.

    Browser date pickers frequently post ``2024-05-01T00:00:00.000Z``;
    the calendar date is taken in the server's local time zone.
    """

    def to_internal_value(self, value):
        if isinstance(value, datetime.datetime):
            return self._local_date(value)
        if isinstance(value, str) and 'T' in value:
            parsed = parse_datetime(value.strip().replace('Z', '+00:00'))
            if parsed is not None:
                return self._local_date(parsed)
        return super().to_internal_value(value)

    @staticmethod
    def _local_date(value: datetime.datetime) -> datetime.date:
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
