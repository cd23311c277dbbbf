from rest_framework import generics, permissions

from core_backend.base.viewsets import BaseViewSet
from .models import User
from .permissions import IsManager
from .serializers import UserSerializer


class UserViewSet(BaseViewSet):
    """
    Staff management. Managers only.
    """

    queryset = User.objects.all()
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, IsManager]
    filterset_fields = ["role", "is_active"]
    ordering_fields = ["id", "email", "role", "date_joined"]
    ordering = ["id"]


class CurrentUserView(generics.RetrieveAPIView):
    """Returns the authenticated staff member."""

    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user
