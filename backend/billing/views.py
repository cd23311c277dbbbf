from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import ReadOnlyBaseViewSet
from users.permissions import IsFloorStaff
from .filters import BillFilter
from .models import Bill
from .serializers import BillSerializer, ConfirmPaymentSerializer
from .services import BillingService


class BillResponseMixin:
    def bill_response(self, bill_id, status_code=status.HTTP_200_OK) -> Response:
        queryset = BillSerializer.Meta.model.objects.select_related(
            *BillSerializer.Meta.select_related_fields
        ).prefetch_related(*BillSerializer.Meta.prefetch_related_fields)
        bill = queryset.get(pk=bill_id)
        context = {"request": self.request, "view": self, "view_mode": "detail"}
        return Response(BillSerializer(bill, context=context).data, status=status_code)


class BillViewSet(BillResponseMixin, ReadOnlyBaseViewSet):
    """
    Bills. Payment and voiding are actions on the bill:
    POST /bills/{id}/pay/ and POST /bills/{id}/void/.
    """

    queryset = Bill.objects.all()
    serializer_class = BillSerializer
    filterset_class = BillFilter
    permission_classes = [permissions.IsAuthenticated, IsFloorStaff]
    ordering_fields = ["generated_at", "paid_at", "total_amount"]
    ordering = ["-generated_at", "-id"]

    @action(detail=True, methods=["post"])
    def pay(self, request: Request, pk=None) -> Response:
        serializer = ConfirmPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        bill = BillingService.confirm_payment(
            pk,
            serializer.validated_data["payment_method"],
            staff=request.user,
            payment_notes=serializer.validated_data["payment_notes"],
        )
        return self.bill_response(bill.id)

    @action(detail=True, methods=["post"])
    def void(self, request: Request, pk=None) -> Response:
        bill = BillingService.void_bill(pk, staff=request.user)
        return self.bill_response(bill.id)


class SessionBillViewSet(BillResponseMixin, viewsets.ViewSet):
    """
    /dining-sessions/{session_pk}/bill/

    GET returns the session's bill, or 204 when none has been generated.
    POST generates (or regenerates) it.
    """

    permission_classes = [permissions.IsAuthenticated, IsFloorStaff]

    def list(self, request: Request, session_pk=None) -> Response:
        bill = BillingService.get_for_session(session_pk)
        if bill is None:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return self.bill_response(bill.id)

    def create(self, request: Request, session_pk=None) -> Response:
        bill = BillingService.generate_bill(session_pk, staff=request.user)
        return self.bill_response(bill.id, status.HTTP_201_CREATED)
