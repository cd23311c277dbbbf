import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import (
    CapacityExceeded,
    Conflict,
    InvalidInput,
    InvalidState,
    NotFound,
    ServiceError,
)
from customers.services import CustomerService
from tables.models import Table
from tables.services import TableService
from .models import Reservation

logger = logging.getLogger(__name__)


class ReservationService:
    """
    Booking lifecycle: create, confirm (with table assignment), cancel and
    no-show.

    A table is claimed for a fixed window starting at the reservation time
    (RESERVATION_WINDOW_MINUTES). Two bookings on one table conflict when
    their windows overlap; an open dining session holds its table for at
    least one window from its start, and until now if it has run longer.

    Tables are locked before reservations, the same order seating uses.
    """

    @staticmethod
    def window() -> timedelta:
        return timedelta(minutes=getattr(settings, "RESERVATION_WINDOW_MINUTES", 90))

    @staticmethod
    def get_reservation(reservation_id, lock=False) -> Reservation:
        queryset = (
            Reservation.objects.select_for_update()
            if lock
            else Reservation.objects.select_related("customer", "table", "confirmed_by")
        )
        try:
            return queryset.get(pk=reservation_id)
        except (Reservation.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Reservation {reservation_id} not found.", entity_id=reservation_id)

    @staticmethod
    def _validate_party_size(party_size, entity_id=None):
        if isinstance(party_size, bool) or not isinstance(party_size, int) or party_size <= 0:
            raise InvalidInput("Party size must be a positive integer.", entity_id=entity_id)

    @staticmethod
    @transaction.atomic
    def create_reservation(
        customer_name: str,
        reservation_time,
        party_size: int,
        phone_number: str = None,
        email: str = None,
        notes: str = "",
        table_id=None,
    ) -> Reservation:
        """
        Book a table request. The guest is found or created by email/phone.

        Availability is not checked here; it is checked at confirmation. A
        `table_id` pins the booking to that table (existence and capacity
        are validated now).
        """
        if reservation_time is None:
            raise InvalidInput("Reservation time is required.")
        if timezone.is_naive(reservation_time):
            reservation_time = timezone.make_aware(reservation_time)
        ReservationService._validate_party_size(party_size)

        table = None
        if table_id is not None:
            table = TableService.get_table(table_id)
            if table.capacity < party_size:
                raise CapacityExceeded(
                    f"Table {table.number} seats {table.capacity}, party size is {party_size}.",
                    entity_id=table.id,
                )

        customer = CustomerService.find_or_create(
            name=customer_name, phone_number=phone_number, email=email
        )

        reservation = Reservation.objects.create(
            customer=customer,
            reservation_time=reservation_time,
            party_size=party_size,
            notes=notes or "",
            table=table,
            status=Reservation.Status.PENDING,
        )
        logger.info(
            f"Created reservation {reservation.id} for customer {customer.id} "
            f"(party of {party_size}{f', pinned to table {table.id}' if table else ''})"
        )
        return reservation

    @staticmethod
    def check_table_available(table: Table, reservation: Reservation) -> None:
        """
        Raise if `table` cannot take `reservation`: too small, out of
        service, or its time window overlaps another confirmed booking or an
        open dining session.
        """
        from dining.models import DiningSession

        if table.capacity < reservation.party_size:
            raise CapacityExceeded(
                f"Table {table.number} seats {table.capacity}, party size is {reservation.party_size}.",
                entity_id=table.id,
            )
        if table.status == Table.Status.OUT_OF_SERVICE:
            raise InvalidState(f"Table {table.number} is out of service.", entity_id=table.id)

        window = ReservationService.window()
        start = reservation.reservation_time

        overlapping = (
            Reservation.objects.filter(
                table=table,
                status=Reservation.Status.CONFIRMED,
                reservation_time__gt=start - window,
                reservation_time__lt=start + window,
            )
            .exclude(pk=reservation.pk)
            .exists()
        )
        if overlapping:
            raise Conflict(
                f"Table {table.number} is already booked around the requested time.",
                entity_id=table.id,
            )

        now = timezone.now()
        open_sessions = DiningSession.objects.filter(
            table=table, status__in=DiningSession.OPEN_STATUSES
        ).only("start_time")
        for session in open_sessions:
            busy_until = max(session.start_time + window, now)
            if start < busy_until:
                raise Conflict(
                    f"Table {table.number} is occupied by session {session.id} at the requested time.",
                    entity_id=table.id,
                )

    @staticmethod
    @transaction.atomic
    def confirm_reservation(reservation_id, staff, table_id=None) -> Reservation:
        """
        Confirm a PENDING reservation and assign its table.

        A pinned table always wins; otherwise `table_id` is used, or the
        smallest AVAILABLE table that fits and passes the conflict check.
        The candidate tables are locked before the reservation.
        """
        snapshot = ReservationService.get_reservation(reservation_id)
        ReservationService._check_pending(snapshot)

        if snapshot.table_id is not None and table_id is not None and int(table_id) != snapshot.table_id:
            raise InvalidInput(
                f"Reservation is pinned to table {snapshot.table_id}.",
                entity_id=snapshot.id,
            )

        chosen_id = snapshot.table_id or table_id
        if chosen_id is not None:
            candidates = [TableService.get_table(chosen_id, lock=True)]
        else:
            candidates = ReservationService._lock_candidates(snapshot.party_size)

        reservation = ReservationService.get_reservation(reservation_id, lock=True)
        ReservationService._check_pending(reservation)

        if chosen_id is not None:
            table = candidates[0]
            ReservationService.check_table_available(table, reservation)
        else:
            table = ReservationService._auto_assign(reservation, candidates)

        reservation.table = table
        reservation.status = Reservation.Status.CONFIRMED
        reservation.confirmed_by = staff
        reservation.save(update_fields=["table", "status", "confirmed_by", "updated_at"])

        if table.status == Table.Status.AVAILABLE:
            table.status = Table.Status.RESERVED
            table.save(update_fields=["status", "updated_at"])

        logger.info(
            f"Reservation {reservation.id} confirmed on table {table.id} by staff {getattr(staff, 'id', None)}"
        )
        return reservation

    @staticmethod
    def _check_pending(reservation: Reservation):
        if reservation.status != Reservation.Status.PENDING:
            raise InvalidState(
                f"Only PENDING reservations can be confirmed. Current status: {reservation.status}",
                entity_id=reservation.id,
            )

    @staticmethod
    def _lock_candidates(party_size: int) -> list:
        """Lock every AVAILABLE table that fits, by id, and return them smallest first."""
        tables = list(
            Table.objects.select_for_update()
            .filter(status=Table.Status.AVAILABLE, capacity__gte=party_size)
            .order_by("pk")
        )
        return sorted(tables, key=lambda table: (table.capacity, table.number))

    @staticmethod
    def _auto_assign(reservation: Reservation, candidates: list) -> Table:
        for table in candidates:
            try:
                ReservationService.check_table_available(table, reservation)
            except ServiceError as exc:
                logger.info(f"Auto-assign skipped table {table.id} for reservation {reservation.id}: {exc.message}")
                continue
            return table

        raise CapacityExceeded(
            f"No available table fits a party of {reservation.party_size} at the requested time.",
            entity_id=reservation.id,
        )

    @staticmethod
    def _release_table(reservation: Reservation, table: Table, previous_status: str) -> None:
        """Hand a RESERVED table back when this booking was the one holding it."""
        if table is None or previous_status != Reservation.Status.CONFIRMED:
            return
        if table.status != Table.Status.RESERVED:
            return

        still_held = (
            Reservation.objects.filter(table=table, status=Reservation.Status.CONFIRMED)
            .exclude(pk=reservation.pk)
            .exists()
        )
        if still_held:
            return

        table.status = Table.Status.AVAILABLE
        table.save(update_fields=["status", "updated_at"])
        logger.info(f"Table {table.id} released by reservation {reservation.id}")

    @staticmethod
    def _close_out(reservation_id, new_status: str) -> Reservation:
        snapshot = ReservationService.get_reservation(reservation_id)
        table = None
        if snapshot.table_id is not None:
            table = TableService.get_table(snapshot.table_id, lock=True)

        reservation = ReservationService.get_reservation(reservation_id, lock=True)
        if reservation.status not in Reservation.ACTIVE_STATUSES:
            raise InvalidState(
                f"Reservation cannot be marked {new_status}. Current status: {reservation.status}",
                entity_id=reservation.id,
            )
        if reservation.table_id != snapshot.table_id:
            # Confirmed onto a table between the read and the lock
            raise Conflict(
                f"Reservation {reservation.id} was assigned a table while being updated; retry.",
                entity_id=reservation.id,
            )

        previous_status = reservation.status
        reservation.status = new_status
        reservation.save(update_fields=["status", "updated_at"])
        ReservationService._release_table(reservation, table, previous_status)
        return reservation

    @staticmethod
    @transaction.atomic
    def cancel_reservation(reservation_id, staff=None) -> Reservation:
        reservation = ReservationService._close_out(reservation_id, Reservation.Status.CANCELLED)
        logger.info(f"Reservation {reservation.id} cancelled by staff {getattr(staff, 'id', None)}")
        return reservation

    @staticmethod
    @transaction.atomic
    def mark_no_show(reservation_id, staff) -> Reservation:
        reservation = ReservationService._close_out(reservation_id, Reservation.Status.NO_SHOW)
        logger.info(f"Reservation {reservation.id} marked no-show by staff {getattr(staff, 'id', None)}")
        return reservation
