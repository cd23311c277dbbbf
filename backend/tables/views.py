from rest_framework import permissions
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from users.permissions import IsFloorStaff, IsManager
from .filters import TableFilter
from .models import Table
from .serializers import TableSerializer, TableStatusSerializer
from .services import TableService


class TableViewSet(BaseViewSet):
    """
    Floor plan tables.

    Managers create, edit and delete tables. Floor staff read them and flip
    the housekeeping statuses through POST /tables/{id}/status/.
    """

    queryset = Table.objects.all()
    serializer_class = TableSerializer
    filterset_class = TableFilter
    ordering_fields = ["number", "capacity", "status"]
    ordering = ["number"]

    def get_permissions(self):
        if self.action in ("list", "retrieve", "change_status"):
            return [permissions.IsAuthenticated(), IsFloorStaff()]
        return [permissions.IsAuthenticated(), IsManager()]

    def perform_create(self, serializer):
        serializer.instance = TableService.create_table(**serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = TableService.update_table(
            serializer.instance.id, **serializer.validated_data
        )

    def perform_destroy(self, instance):
        TableService.delete_table(instance.id)

    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request: Request, pk=None) -> Response:
        serializer = TableStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        table = TableService.change_status(pk, serializer.validated_data["status"])
        return Response(TableSerializer(table, context=self.get_serializer_context()).data)
