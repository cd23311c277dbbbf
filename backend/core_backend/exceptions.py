"""
Service-layer error taxonomy and the DRF exception handler that renders it.

Services raise ``ServiceError`` subclasses. Each carries a stable ``code``, a
human readable ``message`` and, where one applies, the id of the entity the
failure is about. They subclass ``ValueError`` so callers that only care about
"the operation was refused" can keep catching ``ValueError``.
"""
import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(ValueError):
    """Base class for business rule failures raised by services."""

    code = "VALIDATION"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message, entity_id=None):
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id

    def as_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "entity_id": self.entity_id,
        }


class NotFound(ServiceError):
    """A referenced entity does not exist."""

    code = "NOT_FOUND"
    http_status = status.HTTP_404_NOT_FOUND


class InvalidInput(ServiceError):
    """Request data is malformed or out of range."""

    code = "VALIDATION"


class InvalidState(ServiceError):
    """The entity is not in a state that allows the operation."""

    code = "INVALID_STATE"


class InvalidTransition(ServiceError):
    """A status change is not allowed by the transition table."""

    code = "INVALID_TRANSITION"


class CapacityExceeded(ServiceError):
    """Party size exceeds what a table seats."""

    code = "CAPACITY"


class Conflict(ServiceError):
    """The operation collides with another reservation, session or record."""

    code = "CONFLICT"
    http_status = status.HTTP_409_CONFLICT


class PreconditionFailed(ServiceError):
    """A prerequisite (payment, resolution, etc.) has not been met."""

    code = "PRECONDITION"


def service_exception_handler(exc, context):
    """
    Render ServiceError and IntegrityError as ``{"error": {...}}`` bodies.

    DRF validation errors get the same envelope with the field errors under
    ``details``. Everything else falls through to DRF's default handler.
    """
    if isinstance(exc, ServiceError):
        request = context.get("request")
        path = request.path if request is not None else "-"
        logger.warning(
            f"{exc.code} on {path} (entity {exc.entity_id}): {exc.message}"
        )
        return Response({"error": exc.as_dict()}, status=exc.http_status)

    if isinstance(exc, IntegrityError):
        # Unique constraints back up the service checks under concurrency.
        logger.warning(f"Integrity error surfaced as conflict: {exc}")
        error = Conflict("The request conflicts with the current state of another record.")
        return Response({"error": error.as_dict()}, status=error.http_status)

    response = exception_handler(exc, context)

    if isinstance(exc, ValidationError) and response is not None:
        # Serializer errors keep DRF's field map under "details".
        error = InvalidInput("Request data failed validation.")
        response.data = {"error": {**error.as_dict(), "details": response.data}}

    return response
