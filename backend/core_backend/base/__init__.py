"""
Core backend base components.

Shared viewset, serializer and filter foundations used by every app so list
endpoints paginate, filter and optimize their querysets the same way.
"""

from .viewsets import BaseViewSet, ReadOnlyBaseViewSet
from .serializers import BaseModelSerializer, FieldsetMixin
from .mixins import OptimizedQuerysetMixin, ViewModeContextMixin
from .filters import BaseFilterSet, CharInFilter, FlexibleDateTimeFilter

__all__ = [
    # ViewSets
    'BaseViewSet',
    'ReadOnlyBaseViewSet',

    # Serializers
    'BaseModelSerializer',
    'FieldsetMixin',

    # Mixins
    'OptimizedQuerysetMixin',
    'ViewModeContextMixin',

    # Filters
    'BaseFilterSet',
    'CharInFilter',
    'FlexibleDateTimeFilter',
]
