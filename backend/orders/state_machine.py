"""
Order and order-item state machine.

Two kinds of status change exist:

* Staff-requested transitions go through `check_order_transition` /
  `check_item_transition` and must follow ORDER_TRANSITIONS /
  ORDER_ITEM_TRANSITIONS. Writing the current status again is a no-op.
* System-forced transitions skip the tables. They are used by the sold-out
  cascade (in-flight items become SOLD_OUT, their orders ACTION_REQUIRED) and
  by the item cascade of an explicit order-level transition. Callers of the
  forced path live in `orders.services.item_service` and
  `orders.services.order_service` and are named `force_*`.

`derive_order_status` is the status-sync function. It only looks at the
current order status and the item statuses, so it can be re-run at any time
and reaches a fixpoint after one application.
"""
from core_backend.exceptions import InvalidInput, InvalidTransition
from .models import Order, OrderItem

OrderStatus = Order.Status
ItemStatus = OrderItem.Status


ORDER_TRANSITIONS = {
    OrderStatus.PENDING: [OrderStatus.PREPARING, OrderStatus.CANCELLED, OrderStatus.ACTION_REQUIRED],
    OrderStatus.PREPARING: [OrderStatus.READY, OrderStatus.CANCELLED, OrderStatus.ACTION_REQUIRED],
    OrderStatus.ACTION_REQUIRED: [OrderStatus.PREPARING, OrderStatus.CANCELLED],
    OrderStatus.READY: [OrderStatus.SERVED, OrderStatus.CANCELLED],
    OrderStatus.SERVED: [],
    OrderStatus.CANCELLED: [],
}

ORDER_ITEM_TRANSITIONS = {
    ItemStatus.PENDING: [ItemStatus.PREPARING, ItemStatus.CANCELLED, ItemStatus.SOLD_OUT],
    ItemStatus.PREPARING: [ItemStatus.READY, ItemStatus.CANCELLED, ItemStatus.SOLD_OUT],
    ItemStatus.SOLD_OUT: [ItemStatus.CANCELLED],
    ItemStatus.READY: [ItemStatus.SERVED, ItemStatus.CANCELLED],
    ItemStatus.SERVED: [],
    ItemStatus.CANCELLED: [],
}

# Items the kitchen has not finished yet; the sold-out cascade only touches these.
IN_FLIGHT_ITEM_STATUSES = [ItemStatus.PENDING, ItemStatus.PREPARING]

# Orders whose in-flight items are still eligible for the sold-out cascade.
SOLD_OUT_CASCADE_ORDER_STATUSES = [
    OrderStatus.PENDING,
    OrderStatus.PREPARING,
    OrderStatus.ACTION_REQUIRED,
]

# Only these items are charged on a bill.
BILLABLE_ITEM_STATUSES = [ItemStatus.READY, ItemStatus.SERVED]

# When staff move a whole order, items in the listed statuses follow it.
ORDER_ITEM_CASCADE = {
    OrderStatus.PREPARING: (ItemStatus.PREPARING, [ItemStatus.PENDING]),
    OrderStatus.READY: (ItemStatus.READY, [ItemStatus.PENDING, ItemStatus.PREPARING]),
    OrderStatus.SERVED: (
        ItemStatus.SERVED,
        [ItemStatus.PENDING, ItemStatus.PREPARING, ItemStatus.READY],
    ),
    OrderStatus.CANCELLED: (
        ItemStatus.CANCELLED,
        [ItemStatus.PENDING, ItemStatus.PREPARING, ItemStatus.SOLD_OUT, ItemStatus.READY],
    ),
}


def _check_transition(table, choices, label, current, target, entity_id):
    if target not in choices.values:
        raise InvalidInput(f"'{target}' is not a valid {label} status.", entity_id=entity_id)
    if target == current:
        return False
    if target not in table.get(current, []):
        raise InvalidTransition(
            f"Cannot transition {label} from {current} to {target}.",
            entity_id=entity_id,
        )
    return True


def check_order_transition(current, target, entity_id=None):
    """
    Validate a staff-requested order transition.

    Returns True when the status should change and False for a self
    transition. Raises InvalidInput for unknown statuses and
    InvalidTransition for moves the table does not allow.
    """
    return _check_transition(ORDER_TRANSITIONS, OrderStatus, "order", current, target, entity_id)


def check_item_transition(current, target, entity_id=None):
    """Same as check_order_transition, for order items."""
    return _check_transition(ORDER_ITEM_TRANSITIONS, ItemStatus, "order item", current, target, entity_id)


def derive_order_status(current, item_statuses):
    """
    Derive an order's status from its items.

    Rules, first match wins:
      1. every item CANCELLED -> CANCELLED
      2. any item SOLD_OUT -> ACTION_REQUIRED
      3. every item SERVED or CANCELLED -> SERVED
      4. every item READY, SERVED or CANCELLED -> READY
      5. any item PREPARING, READY or SERVED while the order is PENDING -> PREPARING
      6. order was ACTION_REQUIRED -> PENDING if every item is PENDING or
         CANCELLED, otherwise PREPARING
      7. otherwise unchanged

    An order without items keeps its status.
    """
    statuses = list(item_statuses)
    if not statuses:
        return current

    if all(s == ItemStatus.CANCELLED for s in statuses):
        return OrderStatus.CANCELLED

    if any(s == ItemStatus.SOLD_OUT for s in statuses):
        return OrderStatus.ACTION_REQUIRED

    if all(s in (ItemStatus.SERVED, ItemStatus.CANCELLED) for s in statuses):
        return OrderStatus.SERVED

    if all(s in (ItemStatus.READY, ItemStatus.SERVED, ItemStatus.CANCELLED) for s in statuses):
        return OrderStatus.READY

    started = any(s in (ItemStatus.PREPARING, ItemStatus.READY, ItemStatus.SERVED) for s in statuses)
    if started and current == OrderStatus.PENDING:
        return OrderStatus.PREPARING

    if current == OrderStatus.ACTION_REQUIRED:
        if all(s in (ItemStatus.PENDING, ItemStatus.CANCELLED) for s in statuses):
            return OrderStatus.PENDING
        return OrderStatus.PREPARING

    return current
