import django_filters

from core_backend.base.filters import BaseFilterSet, CharInFilter
from .models import Order, OrderItem


class OrderFilter(BaseFilterSet):
    """
    ?status=PENDING,PREPARING for the kitchen queue, ?session=<id> for one
    party, ?table=<id> for whatever is open at a table.
    """

    status = CharInFilter(field_name="status", lookup_expr="in")
    session = django_filters.NumberFilter(field_name="dining_session_id")
    table = django_filters.NumberFilter(field_name="dining_session__table_id")

    class Meta:
        model = Order
        fields = ["status", "session", "table"]


class OrderItemFilter(BaseFilterSet):
    status = CharInFilter(field_name="status", lookup_expr="in")
    menu_item = django_filters.NumberFilter(field_name="menu_item_id")
    order = django_filters.NumberFilter(field_name="order_id")

    class Meta:
        model = OrderItem
        fields = ["status", "menu_item", "order"]
