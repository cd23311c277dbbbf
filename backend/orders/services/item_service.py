import logging

from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import NotFound
from menu.services import MenuItemService
from orders.models import Order, OrderItem
from orders.state_machine import (
    IN_FLIGHT_ITEM_STATUSES,
    SOLD_OUT_CASCADE_ORDER_STATUSES,
    check_item_transition,
)

logger = logging.getLogger(__name__)


class OrderItemService:
    """
    Per-item kitchen progress and the sold-out cascade.

    Kitchen rows are locked menu item, then orders by id, then order items.
    """

    @staticmethod
    def _in_flight_items(menu_item_id):
        return OrderItem.objects.filter(
            menu_item_id=menu_item_id,
            status__in=IN_FLIGHT_ITEM_STATUSES,
            order__status__in=SOLD_OUT_CASCADE_ORDER_STATUSES,
        )

    @staticmethod
    def _lock_orders(order_ids) -> dict:
        return {
            order.pk: order
            for order in Order.objects.select_for_update().filter(pk__in=order_ids).order_by("pk")
        }

    @staticmethod
    @transaction.atomic
    def update_item_status(item_id, new_status: str, staff=None) -> OrderItem:
        """
        Staff-requested item transition followed by status-sync of the
        parent order.

        Marking an item SOLD_OUT also sells out every other in-flight line
        of the same menu item, and those orders are synced too.
        """
        from orders.services.order_service import OrderService

        try:
            order_id, menu_item_id = OrderItem.objects.values_list("order_id", "menu_item_id").get(pk=item_id)
        except (OrderItem.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Order item {item_id} not found.", entity_id=item_id)

        order_ids = {order_id}
        if new_status == OrderItem.Status.SOLD_OUT:
            MenuItemService.get_item(menu_item_id, lock=True)
            order_ids |= set(
                OrderItemService._in_flight_items(menu_item_id).values_list("order_id", flat=True)
            )
        locked_orders = OrderItemService._lock_orders(order_ids)
        order = locked_orders[order_id]
        item = OrderItem.objects.select_for_update().get(pk=item_id)

        if not check_item_transition(item.status, new_status, entity_id=item.id):
            return item

        old_status = item.status
        item.status = new_status
        item.save(update_fields=["status", "updated_at"])
        logger.info(
            f"Order item {item.id} status {old_status} -> {new_status} by staff {getattr(staff, 'id', None)}"
        )

        affected_order_ids = set()
        if new_status == OrderItem.Status.SOLD_OUT:
            affected_order_ids = OrderItemService.force_sold_out(
                item.menu_item_id, exclude_item_id=item.id, flag_orders=False
            )
        affected_order_ids.discard(order.id)

        OrderService.sync_status(order)
        for other_id in sorted(affected_order_ids):
            other = locked_orders.get(other_id) or OrderService.get_order(other_id, lock=True)
            OrderService.sync_status(other)

        item.refresh_from_db()
        return item

    @staticmethod
    def force_sold_out(menu_item_id, exclude_item_id=None, flag_orders=True) -> set:
        """
        System-forced transition: every PENDING/PREPARING line of
        `menu_item_id` in a PENDING, PREPARING or ACTION_REQUIRED order
        becomes SOLD_OUT, skipping the item transition table.

        With `flag_orders` the parent orders are forced to ACTION_REQUIRED in
        the same pass; otherwise the caller re-syncs them. Returns the ids
        of the affected orders. Must run inside the caller's transaction,
        which should already hold the menu item lock.
        """
        candidate_order_ids = set(
            OrderItemService._in_flight_items(menu_item_id).values_list("order_id", flat=True)
        )
        if not candidate_order_ids:
            return set()
        locked_order_ids = list(OrderItemService._lock_orders(candidate_order_ids))

        queryset = (
            OrderItemService._in_flight_items(menu_item_id)
            .filter(order_id__in=locked_order_ids)
            .select_for_update(of=("self",))
        )
        if exclude_item_id is not None:
            queryset = queryset.exclude(pk=exclude_item_id)

        rows = list(queryset.values_list("pk", "order_id"))
        if not rows:
            return set()

        item_ids = [pk for pk, _ in rows]
        order_ids = {order_id for _, order_id in rows}
        now = timezone.now()

        OrderItem.objects.filter(pk__in=item_ids).update(
            status=OrderItem.Status.SOLD_OUT, updated_at=now
        )
        if flag_orders:
            Order.objects.filter(pk__in=order_ids).update(
                status=Order.Status.ACTION_REQUIRED, updated_at=now
            )

        logger.info(
            f"Sold out menu item {menu_item_id}: {len(item_ids)} items across {len(order_ids)} orders"
        )
        return order_ids
