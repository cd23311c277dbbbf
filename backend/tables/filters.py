import django_filters

from core_backend.base.filters import BaseFilterSet, CharInFilter
from .models import Table


class TableFilter(BaseFilterSet):
    """?status=AVAILABLE,RESERVED&min_capacity=4"""

    status = CharInFilter(field_name="status", lookup_expr="in")
    min_capacity = django_filters.NumberFilter(field_name="capacity", lookup_expr="gte")

    class Meta:
        model = Table
        fields = ["status", "min_capacity"]
