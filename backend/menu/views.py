from rest_framework import permissions
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from users.permissions import IsManagerOrKitchen
from .filters import MenuItemFilter
from .models import MenuItem
from .serializers import MenuItemAvailabilitySerializer, MenuItemSerializer
from .services import MenuItemService


class MenuItemViewSet(ReadOnlyBaseViewSet):
    """
    Menu catalog.

    Anyone may browse; anonymous visitors only see available dishes.
    Managers and the kitchen toggle availability.
    """

    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    filterset_class = MenuItemFilter
    ordering_fields = ["name", "price"]
    ordering = ["name"]

    def get_permissions(self):
        if self.action == "set_availability":
            return [permissions.IsAuthenticated(), IsManagerOrKitchen()]
        return [permissions.AllowAny()]

    def get_queryset(self):
        queryset = super().get_queryset()
        if not self.request.user.is_authenticated:
            queryset = queryset.filter(is_available=True)
        return queryset

    @action(detail=True, methods=["post"], url_path="availability")
    def set_availability(self, request: Request, pk=None) -> Response:
        """
        Marking an item unavailable sells out its in-flight order lines.
        The response lists the orders that now need attention.
        """
        serializer = MenuItemAvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = MenuItemService.set_availability(
            pk, serializer.validated_data["is_available"], staff=request.user
        )
        data = MenuItemSerializer(result["menu_item"], context=self.get_serializer_context()).data
        return Response(
            {
                "menu_item": data,
                "affected_order_ids": result["affected_order_ids"],
            }
        )
