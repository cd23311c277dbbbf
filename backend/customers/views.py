from django.db.models import Q
from rest_framework import permissions

from core_backend.base.viewsets import ReadOnlyBaseViewSet
from users.permissions import IsFloorStaff
from .models import Customer
from .serializers import CustomerSerializer


class CustomerViewSet(ReadOnlyBaseViewSet):
    """
    Read-only customer directory for floor staff.

    ?q= matches name, phone or email.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [permissions.IsAuthenticated, IsFloorStaff]
    ordering_fields = ["name", "created_at"]
    ordering = ["name", "id"]

    def get_queryset(self):
        queryset = super().get_queryset()
        term = self.request.query_params.get("q")
        if term:
            queryset = queryset.filter(
                Q(name__icontains=term)
                | Q(phone_number__icontains=term)
                | Q(email__icontains=term)
            )
        return queryset
