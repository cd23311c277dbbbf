from rest_framework import serializers

from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from .models import Table


class TableSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Table representation. Writes are applied through TableService, so the
    uniqueness of `number` is enforced there (and reported as a conflict).
    """

    class Meta:
        model = Table
        fields = ["id", "number", "capacity", "status", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]
        extra_kwargs = {
            "number": {"validators": []},
            "status": {"required": False},
        }

        fieldsets = {
            'list': ['id', 'number', 'capacity', 'status'],
            'detail': '__all__',
        }


class TableStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Table.Status.choices)
