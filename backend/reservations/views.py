from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from users.permissions import IsFloorStaff
from .filters import ReservationFilter
from .models import Reservation
from .serializers import (
    ReservationConfirmSerializer,
    ReservationCreateSerializer,
    ReservationSerializer,
)
from .services import ReservationService


class ReservationViewSet(BaseViewSet):
    """
    Reservations.

    Guests may book without an account (POST is public); every other
    operation is for floor staff. Status changes go through the confirm,
    cancel and no-show actions.
    """

    queryset = Reservation.objects.all()
    serializer_class = ReservationSerializer
    filterset_class = ReservationFilter
    ordering_fields = ["reservation_time", "party_size", "created_at"]
    ordering = ["reservation_time", "id"]
    http_method_names = ["get", "post", "head", "options"]

    def get_permissions(self):
        if self.action == "create":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsFloorStaff()]

    def _respond(self, reservation, status_code=status.HTTP_200_OK):
        reservation = ReservationService.get_reservation(reservation.id)
        serializer = ReservationSerializer(reservation, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = ReservationService.create_reservation(**serializer.validated_data)
        return self._respond(reservation, status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def confirm(self, request: Request, pk=None) -> Response:
        serializer = ReservationConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        reservation = ReservationService.confirm_reservation(
            pk, request.user, table_id=serializer.validated_data.get("table_id")
        )
        return self._respond(reservation)

    @action(detail=True, methods=["post"])
    def cancel(self, request: Request, pk=None) -> Response:
        reservation = ReservationService.cancel_reservation(pk, request.user)
        return self._respond(reservation)

    @action(detail=True, methods=["post"], url_path="no-show")
    def no_show(self, request: Request, pk=None) -> Response:
        reservation = ReservationService.mark_no_show(pk, request.user)
        return self._respond(reservation)
