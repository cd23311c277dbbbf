import django_filters

from core_backend.base.filters import BaseFilterSet, CharInFilter
from .models import DiningSession


class DiningSessionFilter(BaseFilterSet):
    status = CharInFilter(field_name="status", lookup_expr="in")
    table = django_filters.NumberFilter(field_name="table_id")
    started_after = django_filters.IsoDateTimeFilter(field_name="start_time", lookup_expr="gte")

    class Meta:
        model = DiningSession
        fields = ["status", "table", "started_after"]
