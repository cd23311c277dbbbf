import logging

from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import (
    InvalidInput,
    InvalidState,
    NotFound,
    PreconditionFailed,
)
from dining.models import DiningSession
from menu.models import MenuItem
from orders.models import Order, OrderItem
from orders.state_machine import (
    ORDER_ITEM_CASCADE,
    check_item_transition,
    check_order_transition,
    derive_order_status,
)

logger = logging.getLogger(__name__)


class OrderService:
    """Order lifecycle: creation, staff status changes and ACTION_REQUIRED resolution."""

    @staticmethod
    def get_order(order_id, lock=False) -> Order:
        queryset = Order.objects.select_for_update() if lock else Order.objects.all()
        try:
            return queryset.get(pk=order_id)
        except (Order.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Order {order_id} not found.", entity_id=order_id)

    @staticmethod
    def sync_status(order: Order) -> Order:
        """
        Re-derive the order status from a fresh read of its items and write
        it when it changed. Callers hold the order lock.
        """
        item_statuses = list(order.items.values_list("status", flat=True))
        new_status = derive_order_status(order.status, item_statuses)
        if new_status != order.status:
            old_status = order.status
            order.status = new_status
            order.save(update_fields=["status", "updated_at"])
            logger.info(f"Order {order.id} status synced {old_status} -> {new_status}")
        return order

    @staticmethod
    def _build_items(order: Order, items: list) -> list:
        """
        Validate requested lines and return unsaved OrderItems priced at the
        menu's current price. Nothing is written.
        """
        for line in items:
            quantity = line.get("quantity")
            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
                raise InvalidInput(
                    f"Quantity for menu item {line.get('menu_item_id')} must be a positive integer.",
                    entity_id=line.get("menu_item_id"),
                )

        menu_item_ids = {line.get("menu_item_id") for line in items}
        menu_items = {
            menu_item.pk: menu_item
            for menu_item in MenuItem.objects.select_for_update()
            .filter(pk__in=[i for i in menu_item_ids if i is not None])
            .order_by("pk")
        }

        built = []
        for line in items:
            menu_item = menu_items.get(line.get("menu_item_id"))
            if menu_item is None:
                raise NotFound(
                    f"Menu item {line.get('menu_item_id')} not found.",
                    entity_id=line.get("menu_item_id"),
                )
            if not menu_item.is_available:
                raise InvalidState(
                    f"'{menu_item.name}' is currently unavailable.",
                    entity_id=menu_item.id,
                )
            built.append(
                OrderItem(
                    order=order,
                    menu_item=menu_item,
                    quantity=line["quantity"],
                    price_at_order_time=menu_item.price,
                    special_requests=line.get("special_requests") or "",
                    status=OrderItem.Status.PENDING,
                )
            )
        return built

    @staticmethod
    @transaction.atomic
    def create_order(session_id, items: list, staff, notes: str = "") -> Order:
        """
        Place an order on an ACTIVE dining session.

        `items` is a list of dicts with `menu_item_id`, `quantity` and
        optional `special_requests`. Either every line is created or none.
        """
        try:
            session = DiningSession.objects.select_for_update().get(pk=session_id)
        except (DiningSession.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Dining session {session_id} not found.", entity_id=session_id)

        if session.status != DiningSession.Status.ACTIVE:
            raise InvalidState(
                f"Orders can only be placed on ACTIVE sessions. Current status: {session.status}",
                entity_id=session.id,
            )
        if not items:
            raise InvalidInput("An order needs at least one item.", entity_id=session.id)

        order = Order(dining_session=session, taken_by=staff, notes=notes or "")
        new_items = OrderService._build_items(order, items)

        order.status = Order.Status.PENDING
        order.save()
        OrderItem.objects.bulk_create(new_items)

        logger.info(
            f"Created order {order.id} on session {session.id} with {len(new_items)} items "
            f"by staff {getattr(staff, 'id', None)}"
        )
        return order

    @staticmethod
    @transaction.atomic
    def update_order_status(order_id, new_status: str, staff=None) -> Order:
        """
        Staff-requested order transition.

        Items follow the order (see ORDER_ITEM_CASCADE) so the order and its
        items stay consistent; the order status is written directly, not
        re-derived. Leaving ACTION_REQUIRED for PREPARING needs every
        SOLD_OUT item resolved first.
        """
        order = OrderService.get_order(order_id, lock=True)
        if not check_order_transition(order.status, new_status, entity_id=order.id):
            return order

        if (
            order.status == Order.Status.ACTION_REQUIRED
            and new_status == Order.Status.PREPARING
            and order.items.filter(status=OrderItem.Status.SOLD_OUT).exists()
        ):
            raise PreconditionFailed(
                "Resolve or cancel the sold out items before resuming the order.",
                entity_id=order.id,
            )

        cascade = ORDER_ITEM_CASCADE.get(new_status)
        moved = 0
        if cascade is not None:
            item_status, from_statuses = cascade
            moved = order.items.filter(status__in=from_statuses).update(
                status=item_status, updated_at=timezone.now()
            )

        old_status = order.status
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])

        logger.info(
            f"Order {order.id} status {old_status} -> {new_status} by staff "
            f"{getattr(staff, 'id', None)} ({moved} items moved)"
        )
        return order

    @staticmethod
    @transaction.atomic
    def resolve_action_required(
        order_id,
        staff=None,
        cancel_item_ids=None,
        update_items=None,
        add_items=None,
    ) -> Order:
        """
        Fix an ACTION_REQUIRED order in one pass.

        cancel_item_ids: ids of this order's items to cancel.
        update_items: dicts with `id` and optional `quantity` / `special_requests`.
        add_items: new lines, validated like create_order.

        Every SOLD_OUT item must be in `cancel_item_ids`. All input is
        validated before anything is written, then status-sync runs once.
        """
        cancel_item_ids = list(cancel_item_ids or [])
        update_items = list(update_items or [])
        add_items = list(add_items or [])

        # Menu items before the order, as the sold-out cascade does
        added_menu_ids = sorted(
            {line.get("menu_item_id") for line in add_items if isinstance(line.get("menu_item_id"), int)}
        )
        if added_menu_ids:
            list(MenuItem.objects.select_for_update().filter(pk__in=added_menu_ids).order_by("pk"))

        order = OrderService.get_order(order_id, lock=True)
        if order.status != Order.Status.ACTION_REQUIRED:
            raise InvalidState(
                f"Only ACTION_REQUIRED orders can be resolved. Current status: {order.status}",
                entity_id=order.id,
            )

        items = {item.id: item for item in order.items.select_for_update()}

        cancel_set = set()
        for item_id in cancel_item_ids:
            item = items.get(item_id)
            if item is None:
                raise NotFound(f"Order item {item_id} is not part of order {order.id}.", entity_id=item_id)
            check_item_transition(item.status, OrderItem.Status.CANCELLED, entity_id=item.id)
            cancel_set.add(item.id)

        updates = []
        for change in update_items:
            item_id = change.get("id")
            if item_id in cancel_set:
                continue
            item = items.get(item_id)
            if item is None:
                raise NotFound(f"Order item {item_id} is not part of order {order.id}.", entity_id=item_id)
            if item.status in (OrderItem.Status.CANCELLED, OrderItem.Status.SERVED):
                raise InvalidState(
                    f"Order item {item.id} is {item.status} and cannot be changed.",
                    entity_id=item.id,
                )
            quantity = change.get("quantity")
            if quantity is not None and (
                isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0
            ):
                raise InvalidInput(
                    f"Quantity for order item {item.id} must be a positive integer.",
                    entity_id=item.id,
                )
            updates.append((item, change))

        unresolved = [
            item.id
            for item in items.values()
            if item.status == OrderItem.Status.SOLD_OUT and item.id not in cancel_set
        ]
        if unresolved:
            raise PreconditionFailed(
                f"Sold out items {unresolved} must be cancelled to resolve the order.",
                entity_id=order.id,
            )

        new_items = OrderService._build_items(order, add_items) if add_items else []

        now = timezone.now()
        if cancel_set:
            OrderItem.objects.filter(pk__in=cancel_set).update(
                status=OrderItem.Status.CANCELLED, updated_at=now
            )

        for item, change in updates:
            update_fields = []
            if change.get("quantity") is not None:
                item.quantity = change["quantity"]
                update_fields.append("quantity")
            if change.get("special_requests") is not None:
                item.special_requests = change["special_requests"]
                update_fields.append("special_requests")
            if update_fields:
                item.save(update_fields=update_fields + ["updated_at"])

        if new_items:
            OrderItem.objects.bulk_create(new_items)

        logger.info(
            f"Resolved order {order.id} by staff {getattr(staff, 'id', None)}: "
            f"{len(cancel_set)} cancelled, {len(updates)} updated, {len(new_items)} added"
        )
        return OrderService.sync_status(order)
