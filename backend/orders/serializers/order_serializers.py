from django.db.models import Prefetch
from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from orders.models import Order, OrderItem
from users.serializers import StaffReferenceSerializer
from .order_item_serializers import (
    OrderItemSerializer,
    OrderItemUpdateSerializer,
    OrderLineSerializer,
)


class OrderSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Order with its items, session and table.

    Supports view modes via ?view= param:
    - list: kitchen display card (no staff details)
    - detail: everything
    """

    items = OrderItemSerializer(many=True, read_only=True)
    taken_by = StaffReferenceSerializer(read_only=True)
    table_id = serializers.IntegerField(source="dining_session.table_id", read_only=True)
    table_number = serializers.CharField(source="dining_session.table.number", read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "dining_session",
            "table_id",
            "table_number",
            "status",
            "notes",
            "taken_by",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["dining_session__table", "taken_by"]
        prefetch_related_fields = [
            Prefetch("items", queryset=OrderItem.objects.select_related("menu_item")),
        ]

        fieldsets = {
            'list': ['id', 'dining_session', 'table_id', 'table_number', 'status', 'notes', 'items', 'created_at'],
            'detail': '__all__',
        }


class OrderCreateSerializer(serializers.Serializer):
    items = OrderLineSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ResolveActionRequiredSerializer(serializers.Serializer):
    """
    Resolution of an ACTION_REQUIRED order. All three lists are optional and
    independent; every SOLD_OUT item has to appear in cancel_item_ids.
    """

    cancel_item_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, default=list
    )
    update_items = serializers.ListField(
        child=OrderItemUpdateSerializer(), required=False, default=list
    )
    add_items = OrderLineSerializer(many=True, required=False, default=list)
