from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from customers.serializers import CustomerSerializer
from users.serializers import StaffReferenceSerializer
from .models import Reservation


class ReservationSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Read representation of a reservation with its guest and table.
    Writes go through ReservationCreateSerializer and the status actions.
    """

    customer = CustomerSerializer(read_only=True)
    confirmed_by = StaffReferenceSerializer(read_only=True)
    table_number = serializers.CharField(source="table.number", read_only=True, default=None)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "customer",
            "reservation_time",
            "party_size",
            "table",
            "table_number",
            "status",
            "notes",
            "confirmed_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["customer", "table", "confirmed_by"]
        prefetch_related_fields = []

        fieldsets = {
            'list': ['id', 'customer', 'reservation_time', 'party_size', 'table', 'table_number', 'status'],
            'detail': '__all__',
        }


class ReservationSummarySerializer(serializers.ModelSerializer):
    """Compact booking reference embedded in dining session payloads."""

    customer_name = serializers.CharField(source="customer.name", read_only=True)

    class Meta:
        model = Reservation
        fields = ["id", "status", "customer_name", "reservation_time"]
        read_only_fields = fields


class ReservationCreateSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(max_length=30, required=False, allow_blank=True, allow_null=True)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    reservation_time = serializers.DateTimeField()
    party_size = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    table_id = serializers.IntegerField(required=False, allow_null=True)


class ReservationConfirmSerializer(serializers.Serializer):
    table_id = serializers.IntegerField(required=False, allow_null=True)
