from django.db.models import Prefetch
from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from dining.serializers import DiningSessionSerializer
from orders.models import Order, OrderItem
from users.serializers import StaffReferenceSerializer
from .models import Bill


class BillSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Bill with the session it settles, including the session's table,
    orders and items.
    """

    dining_session = DiningSessionSerializer(read_only=True)
    generated_by = StaffReferenceSerializer(read_only=True)
    paid_confirmed_by = StaffReferenceSerializer(read_only=True)

    class Meta:
        model = Bill
        fields = [
            "id",
            "dining_session",
            "subtotal",
            "tax_amount",
            "discount_amount",
            "total_amount",
            "status",
            "generated_by",
            "generated_at",
            "payment_method",
            "payment_notes",
            "paid_at",
            "paid_confirmed_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = [
            "dining_session__table",
            "dining_session__opened_by",
            "generated_by",
            "paid_confirmed_by",
        ]
        prefetch_related_fields = [
            Prefetch(
                "dining_session__orders",
                queryset=Order.objects.select_related("taken_by", "dining_session__table").prefetch_related(
                    Prefetch("items", queryset=OrderItem.objects.select_related("menu_item"))
                ),
            ),
        ]

        fieldsets = {
            'list': [
                'id', 'subtotal', 'tax_amount', 'discount_amount', 'total_amount',
                'status', 'generated_at', 'payment_method', 'paid_at',
            ],
            'detail': '__all__',
        }


class ConfirmPaymentSerializer(serializers.Serializer):
    payment_method = serializers.CharField(max_length=50)
    payment_notes = serializers.CharField(required=False, allow_blank=True, default="")
