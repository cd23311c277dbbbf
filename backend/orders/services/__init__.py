"""
Orders services package.

- OrderService: order creation, staff status changes, ACTION_REQUIRED resolution
  and the status-sync write path
- OrderItemService: per-item status changes and the sold-out cascade
"""

# Core order operations
from .order_service import OrderService

# Item management
from .item_service import OrderItemService

__all__ = [
    'OrderService',
    'OrderItemService',
]
