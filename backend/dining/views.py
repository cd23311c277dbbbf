from rest_framework import permissions, status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from users.permissions import IsFloorStaff
from .filters import DiningSessionFilter
from .models import DiningSession
from .serializers import DiningSessionSerializer, StartSessionSerializer
from .services import DiningSessionService


class DiningSessionViewSet(BaseViewSet):
    """
    Dining sessions, newest first.

    POST seats a party (walk-in or from a confirmed reservation);
    POST /dining-sessions/{id}/close/ ends a paid session.
    """

    queryset = DiningSession.objects.all()
    serializer_class = DiningSessionSerializer
    filterset_class = DiningSessionFilter
    permission_classes = [permissions.IsAuthenticated, IsFloorStaff]
    ordering_fields = ["start_time", "end_time", "status"]
    ordering = ["-start_time", "-id"]
    http_method_names = ["get", "post", "head", "options"]

    def session_response(self, session_id, status_code=status.HTTP_200_OK) -> Response:
        session = self.get_queryset().get(pk=session_id)
        serializer = DiningSessionSerializer(session, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = StartSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        session = DiningSessionService.start_session(
            table_id=data["table_id"],
            party_size=data["party_size"],
            staff=request.user,
            reservation_id=data.get("reservation_id"),
            party_identifier=data["party_identifier"],
        )
        return self.session_response(session.id, status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def close(self, request: Request, pk=None) -> Response:
        session = DiningSessionService.close_session(pk, staff=request.user)
        return self.session_response(session.id)
