from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django.http import JsonResponse

from billing.models import Bill
from dining.models import DiningSession
from orders.models import Order, OrderItem
from orders.state_machine import ORDER_ITEM_TRANSITIONS, ORDER_TRANSITIONS
from reservations.models import Reservation
from tables.models import Table
from users.models import User

# Every status enum clients need, keyed by the name they use for it.
ENUMS = {
    "staff_role": User.Role,
    "table_status": Table.Status,
    "reservation_status": Reservation.Status,
    "dining_session_status": DiningSession.Status,
    "order_status": Order.Status,
    "order_item_status": OrderItem.Status,
    "bill_status": Bill.Status,
}


def _choices(enum):
    return [{"value": value, "label": str(label)} for value, label in enum.choices]


def _transitions(table):
    return {str(source): [str(target) for target in targets] for source, targets in table.items()}


def health_check(request):
    """Simple health check endpoint that doesn't require authentication"""
    return JsonResponse({"status": "ok", "message": "Backend is running"})


@api_view(["GET"])
@permission_classes([AllowAny])
def enums_view(request):
    """
    Status enums and the order/item transition tables, so clients never
    keep their own copies.
    """
    return Response(
        {
            "enums": {name: _choices(enum) for name, enum in ENUMS.items()},
            "transitions": {
                "order": _transitions(ORDER_TRANSITIONS),
                "order_item": _transitions(ORDER_ITEM_TRANSITIONS),
            },
        }
    )
