"""
Orders views package - modular view layer.
"""

from .order_viewset import OrderViewSet, SessionOrderViewSet
from .item_viewset import OrderItemViewSet

__all__ = [
    'OrderViewSet',
    'SessionOrderViewSet',
    'OrderItemViewSet',
]
