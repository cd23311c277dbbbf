from rest_framework import serializers
from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from .models import User


class UserSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Staff user representation.

    Supports view modes via ?view= param:
    - list: Lightweight for list endpoints (default for list action)
    - detail: Full representation (default for retrieve action)

    `password` is write-only and hashed on create/update.
    """

    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "role",
            "is_active",
            "date_joined",
            "updated_at",
            "password",
        ]
        read_only_fields = ["date_joined", "updated_at"]

        fieldsets = {
            'list': ['id', 'email', 'first_name', 'last_name', 'role', 'is_active', 'password'],
            'detail': '__all__',
        }

    def create(self, validated_data):
        password = validated_data.pop("password", None)
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=["password"])
        return instance


class StaffReferenceSerializer(serializers.ModelSerializer):
    """Minimal staff representation for nesting (who confirmed a payment, etc.)."""

    full_name = serializers.CharField(source="get_full_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "full_name", "role"]
