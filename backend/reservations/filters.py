import django_filters

from core_backend.base.filters import BaseFilterSet, CharInFilter
from .models import Reservation


class ReservationFilter(BaseFilterSet):
    """
    ?status=PENDING,CONFIRMED filters by status, ?date=2025-11-11 by the
    calendar day of the requested time.
    """

    status = CharInFilter(field_name="status", lookup_expr="in")
    date = django_filters.DateFilter(field_name="reservation_time", lookup_expr="date")
    table = django_filters.NumberFilter(field_name="table_id")
    customer = django_filters.NumberFilter(field_name="customer_id")

    class Meta:
        model = Reservation
        fields = ["status", "date", "table", "customer"]
