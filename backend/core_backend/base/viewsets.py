from rest_framework import viewsets, filters
from django_filters.rest_framework import DjangoFilterBackend
from .mixins import OptimizedQuerysetMixin, ViewModeContextMixin
from ..pagination import StandardPagination


class BaseViewSet(OptimizedQuerysetMixin, ViewModeContextMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Automatic query optimization via OptimizedQuerysetMixin
    - List/detail fieldsets via ViewModeContextMixin
    - Standard pagination, filtering and ordering

    Usage:
        class TableViewSet(BaseViewSet):
            queryset = Table.objects.all()
            serializer_class = TableSerializer
            # optimization is handled automatically via serializer Meta
    """

    pagination_class = StandardPagination

    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]

    # Default ordering (can be overridden)
    ordering = ['id']


class ReadOnlyBaseViewSet(OptimizedQuerysetMixin, ViewModeContextMixin, viewsets.ReadOnlyModelViewSet):
    """
    Base ViewSet for read-only endpoints.
    """

    pagination_class = StandardPagination
    filter_backends = [
        DjangoFilterBackend,
        filters.OrderingFilter,
    ]
    ordering = ['id']
