import logging

from django.db import transaction

from core_backend.exceptions import InvalidInput, NotFound
from .models import MenuItem

logger = logging.getLogger(__name__)


class MenuItemService:
    @staticmethod
    def get_item(menu_item_id, lock=False) -> MenuItem:
        queryset = MenuItem.objects.select_for_update() if lock else MenuItem.objects.all()
        try:
            return queryset.get(pk=menu_item_id)
        except (MenuItem.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Menu item {menu_item_id} not found.", entity_id=menu_item_id)

    @staticmethod
    @transaction.atomic
    def set_availability(menu_item_id, is_available, staff=None) -> dict:
        """
        Mark a menu item available or unavailable.

        Going unavailable sells out every in-flight line of the item and
        flags the affected orders ACTION_REQUIRED. Returns the item plus the
        number of affected orders.
        """
        from orders.services import OrderItemService

        if not isinstance(is_available, bool):
            raise InvalidInput("is_available must be true or false.", entity_id=menu_item_id)

        menu_item = MenuItemService.get_item(menu_item_id, lock=True)
        affected_order_ids = set()

        if menu_item.is_available != is_available:
            menu_item.is_available = is_available
            menu_item.save(update_fields=["is_available", "updated_at"])
            logger.info(
                f"Menu item {menu_item.id} marked {'available' if is_available else 'unavailable'} "
                f"by staff {getattr(staff, 'id', None)}"
            )

        if not is_available:
            affected_order_ids = OrderItemService.force_sold_out(menu_item.id)

        return {
            "menu_item": menu_item,
            "affected_order_ids": sorted(affected_order_ids),
        }
