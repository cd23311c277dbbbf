import logging

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from core_backend.exceptions import (
    Conflict,
    InvalidInput,
    InvalidTransition,
    NotFound,
    PreconditionFailed,
)
from .models import Table

logger = logging.getLogger(__name__)


class TableService:
    """
    Table registry: creation, edits and the guarded status transition.

    OCCUPIED and RESERVED are owned by the seating and reservation flows;
    staff may only move tables between the remaining statuses.
    """

    # Only reachable through a dining session or a reservation confirmation.
    FLOW_OWNED_STATUSES = [Table.Status.OCCUPIED, Table.Status.RESERVED]

    @staticmethod
    def get_table(table_id, lock=False) -> Table:
        queryset = Table.objects.select_for_update() if lock else Table.objects.all()
        try:
            return queryset.get(pk=table_id)
        except (Table.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Table {table_id} not found.", entity_id=table_id)

    @staticmethod
    def _validate_capacity(capacity, entity_id=None):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise InvalidInput("Capacity must be a positive integer.", entity_id=entity_id)

    @staticmethod
    def _validate_number(number, entity_id=None):
        number = (number or "").strip() if isinstance(number, str) else number
        if not number:
            raise InvalidInput("Table number is required.", entity_id=entity_id)
        return number

    @staticmethod
    @transaction.atomic
    def create_table(number: str, capacity: int, status: str = Table.Status.AVAILABLE) -> Table:
        number = TableService._validate_number(number)
        TableService._validate_capacity(capacity)
        status = status or Table.Status.AVAILABLE
        if status not in Table.Status.values:
            raise InvalidInput(f"'{status}' is not a valid table status.")
        if status in TableService.FLOW_OWNED_STATUSES:
            raise InvalidTransition(
                f"A new table cannot start as {status}; that status is set by seating or reservation confirmation."
            )
        if Table.objects.filter(number=number).exists():
            raise Conflict(f"Table number '{number}' already exists.")

        try:
            with transaction.atomic():
                table = Table.objects.create(number=number, capacity=capacity, status=status)
        except IntegrityError:
            raise Conflict(f"Table number '{number}' already exists.")

        logger.info(f"Created table {table.id} ({table.number}, seats {table.capacity})")
        return table

    @staticmethod
    @transaction.atomic
    def update_table(table_id, **changes) -> Table:
        """
        Update number, capacity and/or status. A status change runs the same
        guard as change_status.
        """
        table = TableService.get_table(table_id, lock=True)
        update_fields = []

        if "number" in changes and changes["number"] is not None:
            number = TableService._validate_number(changes["number"], entity_id=table.id)
            if number != table.number:
                if Table.objects.filter(number=number).exclude(pk=table.pk).exists():
                    raise Conflict(f"Table number '{number}' already exists.", entity_id=table.id)
                table.number = number
                update_fields.append("number")

        if "capacity" in changes and changes["capacity"] is not None:
            TableService._validate_capacity(changes["capacity"], entity_id=table.id)
            table.capacity = changes["capacity"]
            update_fields.append("capacity")

        if "status" in changes and changes["status"] is not None:
            if TableService._guard_status_change(table, changes["status"]):
                table.status = changes["status"]
                update_fields.append("status")

        if update_fields:
            try:
                with transaction.atomic():
                    table.save(update_fields=update_fields + ["updated_at"])
            except IntegrityError:
                raise Conflict(f"Table number '{table.number}' already exists.", entity_id=table.id)
            logger.info(f"Updated table {table.id}: {', '.join(update_fields)}")

        return table

    @staticmethod
    @transaction.atomic
    def change_status(table_id, new_status: str) -> Table:
        """Staff-requested status change, e.g. marking a table NEEDS_CLEANING."""
        table = TableService.get_table(table_id, lock=True)
        if TableService._guard_status_change(table, new_status):
            old_status = table.status
            table.status = new_status
            table.save(update_fields=["status", "updated_at"])
            logger.info(f"Table {table.id} status {old_status} -> {new_status}")
        return table

    @staticmethod
    def _guard_status_change(table: Table, new_status: str) -> bool:
        """
        Returns True when the write should happen, False for a no-op.
        """
        from dining.models import DiningSession
        from reservations.models import Reservation

        if new_status not in Table.Status.values:
            raise InvalidInput(f"'{new_status}' is not a valid table status.", entity_id=table.id)

        if new_status == table.status:
            return False

        if new_status == Table.Status.OCCUPIED:
            raise InvalidTransition(
                "A table becomes OCCUPIED only by starting a dining session.",
                entity_id=table.id,
            )
        if new_status == Table.Status.RESERVED:
            raise InvalidTransition(
                "A table becomes RESERVED only by confirming a reservation.",
                entity_id=table.id,
            )

        if table.status == Table.Status.RESERVED:
            if Reservation.objects.filter(
                table=table, status__in=Reservation.ACTIVE_STATUSES
            ).exists():
                raise PreconditionFailed(
                    f"Table {table.number} is held by an active reservation; cancel or seat it first.",
                    entity_id=table.id,
                )

        if table.status == Table.Status.OCCUPIED:
            if DiningSession.objects.filter(
                table=table, status__in=DiningSession.OPEN_STATUSES
            ).exists():
                raise PreconditionFailed(
                    f"Table {table.number} has an open dining session; close it first.",
                    entity_id=table.id,
                )

        return True

    @staticmethod
    @transaction.atomic
    def delete_table(table_id) -> None:
        from dining.models import DiningSession
        from reservations.models import Reservation

        table = TableService.get_table(table_id, lock=True)

        if Reservation.objects.filter(
            table=table, status__in=Reservation.TABLE_BLOCKING_STATUSES
        ).exists():
            raise PreconditionFailed(
                f"Table {table.number} has active or upcoming reservations; cancel or reassign them first.",
                entity_id=table.id,
            )
        if DiningSession.objects.filter(
            table=table, status__in=DiningSession.OPEN_STATUSES
        ).exists():
            raise PreconditionFailed(
                f"Table {table.number} has an open dining session.",
                entity_id=table.id,
            )

        try:
            with transaction.atomic():
                table.delete()
        except ProtectedError:
            raise PreconditionFailed(
                f"Table {table.number} has past reservations or sessions; mark it OUT_OF_SERVICE instead.",
                entity_id=table.id,
            )

        logger.info(f"Deleted table {table_id}")
