from django.db.models import Prefetch
from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from orders.models import Order, OrderItem
from orders.serializers import OrderSerializer
from reservations.serializers import ReservationSummarySerializer
from tables.serializers import TableSerializer
from users.serializers import StaffReferenceSerializer
from .models import DiningSession


class DiningSessionSerializer(FieldsetMixin, BaseModelSerializer):
    """
    A seated party with its table, orders and bill status.

    Both views carry the table, reservation and opener summaries. The list
    view omits the orders and does not prefetch them; the detail view
    includes every order with its items.
    """

    table = TableSerializer(read_only=True)
    reservation = ReservationSummarySerializer(read_only=True, allow_null=True)
    opened_by = StaffReferenceSerializer(read_only=True)
    orders = OrderSerializer(many=True, read_only=True)
    bill_id = serializers.SerializerMethodField()
    bill_status = serializers.SerializerMethodField()

    class Meta:
        model = DiningSession
        fields = [
            "id",
            "table",
            "reservation",
            "opened_by",
            "party_identifier",
            "party_size",
            "status",
            "start_time",
            "end_time",
            "bill_id",
            "bill_status",
            "orders",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["table", "opened_by", "bill", "reservation__customer"]
        prefetch_related_fields = [
            Prefetch(
                "orders",
                queryset=Order.objects.select_related("taken_by", "dining_session__table").prefetch_related(
                    Prefetch("items", queryset=OrderItem.objects.select_related("menu_item"))
                ),
            ),
        ]
        list_prefetch_related_fields = []

        fieldsets = {
            'list': [
                'id', 'table', 'reservation', 'opened_by', 'party_identifier', 'party_size',
                'status', 'start_time', 'end_time', 'bill_id', 'bill_status',
            ],
            'detail': '__all__',
        }

    def get_bill_id(self, obj):
        bill = getattr(obj, "bill", None)
        return bill.id if bill else None

    def get_bill_status(self, obj):
        bill = getattr(obj, "bill", None)
        return bill.status if bill else None


class StartSessionSerializer(serializers.Serializer):
    table_id = serializers.IntegerField()
    party_size = serializers.IntegerField(min_value=1)
    reservation_id = serializers.IntegerField(required=False, allow_null=True)
    party_identifier = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
