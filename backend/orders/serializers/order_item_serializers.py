from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from orders.models import OrderItem


class OrderItemSerializer(BaseModelSerializer):
    """
    One order line. `price_at_order_time` is the price captured when the
    order was placed; `line_total` is that price times the quantity.
    """

    menu_item_name = serializers.CharField(source="menu_item.name", read_only=True)
    line_total = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order",
            "menu_item",
            "menu_item_name",
            "quantity",
            "price_at_order_time",
            "special_requests",
            "status",
            "line_total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["menu_item", "order"]
        prefetch_related_fields = []


class OrderLineSerializer(serializers.Serializer):
    """A requested line when placing an order or adding to one."""

    menu_item_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")


class OrderItemUpdateSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, required=False)
    special_requests = serializers.CharField(required=False, allow_blank=True)
