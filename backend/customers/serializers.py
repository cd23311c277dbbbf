from core_backend.base import BaseModelSerializer
from .models import Customer


class CustomerSerializer(BaseModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "phone_number", "email", "created_at", "updated_at"]
        read_only_fields = fields
        select_related_fields = []
        prefetch_related_fields = []
