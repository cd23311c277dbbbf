import django_filters

from core_backend.base.filters import BaseFilterSet, CharInFilter
from .models import Bill


class BillFilter(BaseFilterSet):
    status = CharInFilter(field_name="status", lookup_expr="in")
    session = django_filters.NumberFilter(field_name="dining_session_id")
    paid_after = django_filters.IsoDateTimeFilter(field_name="paid_at", lookup_expr="gte")
    paid_before = django_filters.IsoDateTimeFilter(field_name="paid_at", lookup_expr="lte")

    class Meta:
        model = Bill
        fields = ["status", "session", "payment_method"]
