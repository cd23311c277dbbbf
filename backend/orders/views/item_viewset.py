from rest_framework import permissions
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from orders.filters import OrderItemFilter
from orders.models import OrderItem
from orders.serializers import OrderItemSerializer, UpdateOrderItemStatusSerializer
from orders.services import OrderItemService
from users.permissions import CanUpdateItemStatus, IsServiceStaff


class OrderItemViewSet(ReadOnlyBaseViewSet):
    """
    Individual order lines. The kitchen moves them through
    POST /order-items/{id}/status/; the parent order follows.
    """

    queryset = OrderItem.objects.all()
    serializer_class = OrderItemSerializer
    filterset_class = OrderItemFilter
    ordering = ["created_at", "id"]

    def get_permissions(self):
        if self.action == "update_status":
            return [permissions.IsAuthenticated(), CanUpdateItemStatus()]
        return [permissions.IsAuthenticated(), IsServiceStaff()]

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        serializer = UpdateOrderItemStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = OrderItemService.update_item_status(
            pk, serializer.validated_data["status"], staff=request.user
        )
        item = self.get_queryset().get(pk=item.id)
        return Response(OrderItemSerializer(item, context=self.get_serializer_context()).data)
