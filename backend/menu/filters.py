import django_filters

from core_backend.base.filters import BaseFilterSet
from .models import MenuItem


class MenuItemFilter(BaseFilterSet):
    is_available = django_filters.BooleanFilter(field_name="is_available")
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = MenuItem
        fields = ["is_available", "search"]
