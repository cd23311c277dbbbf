from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from .models import MenuItem


class MenuItemSerializer(FieldsetMixin, BaseModelSerializer):
    class Meta:
        model = MenuItem
        fields = ["id", "name", "description", "price", "is_available", "created_at", "updated_at"]
        read_only_fields = fields

        fieldsets = {
            'list': ['id', 'name', 'price', 'is_available'],
            'detail': '__all__',
        }


class MenuItemAvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()
