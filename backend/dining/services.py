import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from core_backend.exceptions import (
    CapacityExceeded,
    Conflict,
    InvalidInput,
    InvalidState,
    NotFound,
    PreconditionFailed,
)
from reservations.models import Reservation
from reservations.services import ReservationService
from tables.models import Table
from tables.services import TableService
from .models import DiningSession

logger = logging.getLogger(__name__)


class DiningSessionService:
    """
    Seating and closing parties.

    Floor rows are always locked table, reservation, session, bill. A
    session's table and reservation never change after seating, so they can
    be read without a lock to find which rows to lock first.
    """

    @staticmethod
    def get_session(session_id, lock=False) -> DiningSession:
        queryset = (
            DiningSession.objects.select_for_update()
            if lock
            else DiningSession.objects.select_related("table", "reservation", "opened_by")
        )
        try:
            return queryset.get(pk=session_id)
        except (DiningSession.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Dining session {session_id} not found.", entity_id=session_id)

    @staticmethod
    def _check_capacity(table: Table, party_size: int):
        if table.capacity < party_size:
            raise CapacityExceeded(
                f"Table {table.number} seats {table.capacity}, party size is {party_size}.",
                entity_id=table.id,
            )

    @staticmethod
    @transaction.atomic
    def start_session(
        table_id,
        party_size: int,
        staff,
        reservation_id=None,
        party_identifier: str = "",
    ) -> DiningSession:
        """
        Seat a party at a table and open a dining session.

        With `reservation_id` the booking must be CONFIRMED and its party size
        wins over `party_size`. The table must match a pinned booking table,
        and be AVAILABLE (or RESERVED for this booking). Walk-ins need an
        AVAILABLE table.
        """
        if isinstance(party_size, bool) or not isinstance(party_size, int) or party_size <= 0:
            raise InvalidInput("Party size must be a positive integer.")

        table = TableService.get_table(table_id, lock=True)
        DiningSessionService._check_capacity(table, party_size)

        reservation = None
        if reservation_id is not None:
            reservation = ReservationService.get_reservation(reservation_id, lock=True)

            if reservation.status != Reservation.Status.CONFIRMED:
                raise InvalidState(
                    f"Only CONFIRMED reservations can be seated. Current status: {reservation.status}",
                    entity_id=reservation.id,
                )

            party_size = reservation.party_size
            DiningSessionService._check_capacity(table, party_size)

            if reservation.table_id is not None:
                if reservation.table_id != table.id:
                    raise Conflict(
                        f"Reservation {reservation.id} is assigned to table {reservation.table_id}, not {table.id}.",
                        entity_id=reservation.id,
                    )
                if table.status not in (Table.Status.RESERVED, Table.Status.AVAILABLE):
                    raise InvalidState(
                        f"Table {table.number} is {table.status} and cannot be seated.",
                        entity_id=table.id,
                    )
            elif table.status != Table.Status.AVAILABLE:
                raise InvalidState(
                    f"Table {table.number} is {table.status} and cannot be seated.",
                    entity_id=table.id,
                )
        elif table.status != Table.Status.AVAILABLE:
            raise InvalidState(
                f"Table {table.number} is {table.status}; walk-ins need an AVAILABLE table.",
                entity_id=table.id,
            )

        if reservation is not None:
            party_identifier = reservation.customer.name
        party_identifier = (party_identifier or "").strip() or f"Party of {party_size}"

        try:
            with transaction.atomic():
                session = DiningSession.objects.create(
                    table=table,
                    reservation=reservation,
                    opened_by=staff,
                    party_identifier=party_identifier,
                    party_size=party_size,
                    status=DiningSession.Status.ACTIVE,
                    start_time=timezone.now(),
                )
        except IntegrityError:
            if reservation is not None and DiningSession.objects.filter(reservation=reservation).exists():
                raise Conflict(
                    f"Reservation {reservation.id} already has a dining session.",
                    entity_id=reservation.id,
                )
            raise Conflict(
                f"Table {table.number} already has an open dining session.",
                entity_id=table.id,
            )

        table.status = Table.Status.OCCUPIED
        table.save(update_fields=["status", "updated_at"])

        if reservation is not None:
            reservation.status = Reservation.Status.SEATED
            reservation.table = table
            reservation.save(update_fields=["status", "table", "updated_at"])

        logger.info(
            f"Started dining session {session.id} at table {table.id} "
            f"for {party_size} guests (reservation {reservation.id if reservation else None})"
        )
        return session

    @staticmethod
    def lock_for_close_out(session_id):
        """
        Lock the session's table, its reservation (if any) and the session,
        in that order. Returns (session, table, reservation).

        Must run inside the caller's transaction.
        """
        snapshot = DiningSessionService.get_session(session_id)
        table = TableService.get_table(snapshot.table_id, lock=True)
        reservation = None
        if snapshot.reservation_id is not None:
            reservation = ReservationService.get_reservation(snapshot.reservation_id, lock=True)
        session = DiningSessionService.get_session(session_id, lock=True)
        return session, table, reservation

    @staticmethod
    def finish_session(session: DiningSession, table: Table, reservation=None) -> DiningSession:
        """
        Close a session whose bill is settled: CLOSED with an end time, the
        table back to AVAILABLE and the reservation COMPLETED.

        The caller holds the locks from lock_for_close_out and has checked
        the bill.
        """
        session.status = DiningSession.Status.CLOSED
        session.end_time = timezone.now()
        session.save(update_fields=["status", "end_time", "updated_at"])

        table.status = Table.Status.AVAILABLE
        table.save(update_fields=["status", "updated_at"])

        if reservation is not None and reservation.status == Reservation.Status.SEATED:
            reservation.status = Reservation.Status.COMPLETED
            reservation.save(update_fields=["status", "updated_at"])

        logger.info(f"Closed dining session {session.id}; table {table.id} is available")
        return session

    @staticmethod
    @transaction.atomic
    def close_session(session_id, staff=None) -> DiningSession:
        """Close a BILLED session whose bill has been paid."""
        from billing.models import Bill

        session, table, reservation = DiningSessionService.lock_for_close_out(session_id)
        if session.status != DiningSession.Status.BILLED:
            raise PreconditionFailed(
                f"Only BILLED sessions can be closed. Current status: {session.status}",
                entity_id=session.id,
            )

        bill = Bill.objects.select_for_update().filter(dining_session=session).first()
        if bill is None or bill.status != Bill.Status.PAID:
            raise PreconditionFailed(
                "The session's bill has not been paid.",
                entity_id=session.id,
            )

        return DiningSessionService.finish_session(session, table, reservation)
