from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from dining.services import DiningSessionService
from orders.filters import OrderFilter
from orders.models import Order
from orders.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    ResolveActionRequiredSerializer,
    UpdateOrderStatusSerializer,
)
from orders.services import OrderService  # Re-exported from services/__init__.py
from users.permissions import IsFloorStaff, IsServiceStaff


class OrderResponseMixin:
    def order_response(self, order_id, status_code=status.HTTP_200_OK) -> Response:
        """Re-read the order with its items so the payload reflects every cascade."""
        order = self.get_queryset().get(pk=order_id)
        serializer = OrderSerializer(order, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)


class OrderViewSet(OrderResponseMixin, ReadOnlyBaseViewSet):
    """
    Orders across all sessions, oldest first (kitchen display order).

    Any staff role may read and move an order's status; resolving an
    ACTION_REQUIRED order is for floor staff.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "updated_at", "status"]
    ordering = ["created_at", "id"]

    def get_permissions(self):
        if self.action == "resolve":
            return [permissions.IsAuthenticated(), IsFloorStaff()]
        return [permissions.IsAuthenticated(), IsServiceStaff()]

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_order_status(
            pk, serializer.validated_data["status"], staff=request.user
        )
        return self.order_response(order.id)

    @action(detail=True, methods=["post"])
    def resolve(self, request: Request, pk=None) -> Response:
        serializer = ResolveActionRequiredSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = OrderService.resolve_action_required(
            pk,
            staff=request.user,
            cancel_item_ids=data["cancel_item_ids"],
            update_items=data["update_items"],
            add_items=data["add_items"],
        )
        return self.order_response(order.id)


class SessionOrderViewSet(OrderResponseMixin, ReadOnlyBaseViewSet):
    """
    /dining-sessions/{session_pk}/orders/

    GET lists the session's orders, POST places a new one.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering = ["created_at", "id"]
    http_method_names = ["get", "post", "head", "options"]

    def get_permissions(self):
        if self.action == "create":
            return [permissions.IsAuthenticated(), IsFloorStaff()]
        return [permissions.IsAuthenticated(), IsServiceStaff()]

    def get_queryset(self):
        return super().get_queryset().filter(dining_session_id=self.kwargs["session_pk"])

    def list(self, request: Request, *args, **kwargs) -> Response:
        # 404 for an unknown session rather than an empty page
        DiningSessionService.get_session(kwargs["session_pk"])
        return super().list(request, *args, **kwargs)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.create_order(
            kwargs["session_pk"],
            serializer.validated_data["items"],
            staff=request.user,
            notes=serializer.validated_data["notes"],
        )
        return self.order_response(order.id, status.HTTP_201_CREATED)
