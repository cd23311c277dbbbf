"""
Orders serializers package - modular serializer layer.
"""

# Order item serializers
from .order_item_serializers import (
    OrderItemSerializer,
    OrderLineSerializer,
    OrderItemUpdateSerializer,
)

# Order serializers
from .order_serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    ResolveActionRequiredSerializer,
)

# Status serializers
from .status_serializers import UpdateOrderStatusSerializer, UpdateOrderItemStatusSerializer

__all__ = [
    # Order items
    'OrderItemSerializer',
    'OrderLineSerializer',
    'OrderItemUpdateSerializer',
    # Orders
    'OrderSerializer',
    'OrderCreateSerializer',
    'ResolveActionRequiredSerializer',
    # Status
    'UpdateOrderStatusSerializer',
    'UpdateOrderItemStatusSerializer',
]
