"""
Reservation Manager tests: booking, confirmation with table assignment and
conflict detection, cancellation and no-shows.
"""
import pytest
from datetime import timedelta
from django.utils import timezone

from core_backend.exceptions import (
    CapacityExceeded,
    Conflict,
    InvalidInput,
    InvalidState,
    NotFound,
)
from customers.models import Customer
from dining.models import DiningSession
from reservations.models import Reservation
from reservations.services import ReservationService
from tables.models import Table


def _book(party_size=2, hours=1, **kwargs):
    kwargs.setdefault('email', 'grace@example.com')
    return ReservationService.create_reservation(
        customer_name=kwargs.pop('name', 'Grace Hopper'),
        reservation_time=timezone.now() + timedelta(hours=hours),
        party_size=party_size,
        **kwargs,
    )


@pytest.mark.django_db
@pytest.mark.business_logic
class TestCreateReservation:
    def test_create_finds_or_creates_the_guest(self, customer):
        reservation = _book(name='Ada Lovelace', email='ADA@example.com')

        assert reservation.status == Reservation.Status.PENDING
        assert reservation.customer == customer
        assert reservation.table is None
        assert Customer.objects.count() == 1

    def test_new_guest(self):
        reservation = _book(phone_number='555-0199')

        assert reservation.customer.phone_number == '555-0199'

    def test_pinned_table_checked_for_capacity(self, table_two):
        with pytest.raises(CapacityExceeded):
            _book(party_size=3, table_id=table_two.id)

    def test_pinned_table_must_exist(self):
        with pytest.raises(NotFound):
            _book(table_id=9999)

    def test_party_size_must_be_positive(self):
        with pytest.raises(InvalidInput):
            _book(party_size=0)

    def test_customer_name_required(self):
        with pytest.raises(InvalidInput):
            _book(name='')


@pytest.mark.django_db
@pytest.mark.business_logic
class TestConfirmReservation:
    def test_auto_assigns_smallest_fitting_table(self, pending_reservation, manager, table_six, table_two, table_four):
        reservation = ReservationService.confirm_reservation(pending_reservation.id, manager)

        assert reservation.status == Reservation.Status.CONFIRMED
        assert reservation.table == table_two
        assert reservation.confirmed_by == manager
        table_two.refresh_from_db()
        assert table_two.status == Table.Status.RESERVED

    def test_capacity_boundary(self, customer, manager, table_two):
        """Party size equal to capacity fits; one more does not."""
        exact = Reservation.objects.create(
            customer=customer, reservation_time=timezone.now() + timedelta(hours=1), party_size=2,
        )
        assert ReservationService.confirm_reservation(exact.id, manager, table_id=table_two.id).table == table_two

        too_big = Reservation.objects.create(
            customer=customer, reservation_time=timezone.now() + timedelta(days=2), party_size=3,
        )
        with pytest.raises(CapacityExceeded):
            ReservationService.confirm_reservation(too_big.id, manager, table_id=table_two.id)

    def test_no_table_fits(self, customer, manager, table_two):
        big = Reservation.objects.create(
            customer=customer, reservation_time=timezone.now() + timedelta(hours=1), party_size=8,
        )

        with pytest.raises(CapacityExceeded):
            ReservationService.confirm_reservation(big.id, manager)

        big.refresh_from_db()
        assert big.status == Reservation.Status.PENDING

    def test_overlapping_booking_conflicts(self, pending_reservation, confirmed_reservation, manager):
        with pytest.raises(Conflict):
            ReservationService.confirm_reservation(
                pending_reservation.id, manager, table_id=confirmed_reservation.table_id
            )

    def test_bookings_outside_the_window_do_not_conflict(self, settings, customer, confirmed_reservation, manager):
        settings.RESERVATION_WINDOW_MINUTES = 90
        later = Reservation.objects.create(
            customer=customer,
            reservation_time=confirmed_reservation.reservation_time + timedelta(minutes=90),
            party_size=2,
        )

        reservation = ReservationService.confirm_reservation(
            later.id, manager, table_id=confirmed_reservation.table_id
        )

        assert reservation.status == Reservation.Status.CONFIRMED
        # Still RESERVED, now held by two bookings
        assert reservation.table.status == Table.Status.RESERVED

    def test_auto_assign_skips_conflicting_table(self, pending_reservation, confirmed_reservation, manager, table_six):
        """table_four is RESERVED; auto-assign only scans AVAILABLE tables."""
        reservation = ReservationService.confirm_reservation(pending_reservation.id, manager)

        assert reservation.table == table_six

    def test_open_session_conflicts(self, active_session, pending_reservation, manager):
        with pytest.raises(Conflict):
            ReservationService.confirm_reservation(
                pending_reservation.id, manager, table_id=active_session.table_id
            )

    def test_open_session_holds_table_for_one_window(self, settings, active_session, customer, manager):
        settings.RESERVATION_WINDOW_MINUTES = 90
        DiningSession.objects.filter(pk=active_session.pk).update(
            start_time=timezone.now() - timedelta(hours=1)
        )
        soon = Reservation.objects.create(
            customer=customer, reservation_time=timezone.now() + timedelta(minutes=10), party_size=2,
        )
        later = Reservation.objects.create(
            customer=customer, reservation_time=timezone.now() + timedelta(hours=2), party_size=2,
        )

        with pytest.raises(Conflict):
            ReservationService.confirm_reservation(soon.id, manager, table_id=active_session.table_id)

        reservation = ReservationService.confirm_reservation(later.id, manager, table_id=active_session.table_id)
        assert reservation.status == Reservation.Status.CONFIRMED
        # An OCCUPIED table is not flipped to RESERVED
        assert reservation.table.status == Table.Status.OCCUPIED

    def test_out_of_service_table(self, pending_reservation, manager, table_four):
        table_four.status = Table.Status.OUT_OF_SERVICE
        table_four.save()

        with pytest.raises(InvalidState):
            ReservationService.confirm_reservation(pending_reservation.id, manager, table_id=table_four.id)

    def test_only_pending_can_be_confirmed(self, confirmed_reservation, manager):
        with pytest.raises(InvalidState):
            ReservationService.confirm_reservation(confirmed_reservation.id, manager)

    def test_pinned_table_wins(self, manager, table_four, table_six):
        pinned = _book(table_id=table_six.id)

        assert ReservationService.confirm_reservation(pinned.id, manager).table == table_six

        other = _book(hours=30, table_id=table_six.id, email='other@example.com')
        with pytest.raises(InvalidInput):
            ReservationService.confirm_reservation(other.id, manager, table_id=table_four.id)


@pytest.mark.django_db
@pytest.mark.business_logic
class TestCancelAndNoShow:
    def test_cancel_pending_without_table(self, pending_reservation, waiter):
        reservation = ReservationService.cancel_reservation(pending_reservation.id, waiter)

        assert reservation.status == Reservation.Status.CANCELLED
        assert reservation.table is None

    def test_cancel_confirmed_releases_table(self, confirmed_reservation, waiter):
        ReservationService.cancel_reservation(confirmed_reservation.id, waiter)

        confirmed_reservation.table.refresh_from_db()
        assert confirmed_reservation.table.status == Table.Status.AVAILABLE

    def test_table_stays_reserved_for_another_booking(self, confirmed_reservation, customer, waiter):
        Reservation.objects.create(
            customer=customer,
            reservation_time=confirmed_reservation.reservation_time + timedelta(days=1),
            party_size=2,
            table=confirmed_reservation.table,
            status=Reservation.Status.CONFIRMED,
        )

        ReservationService.cancel_reservation(confirmed_reservation.id, waiter)

        confirmed_reservation.table.refresh_from_db()
        assert confirmed_reservation.table.status == Table.Status.RESERVED

    def test_no_show_releases_table(self, confirmed_reservation, waiter):
        reservation = ReservationService.mark_no_show(confirmed_reservation.id, waiter)

        assert reservation.status == Reservation.Status.NO_SHOW
        confirmed_reservation.table.refresh_from_db()
        assert confirmed_reservation.table.status == Table.Status.AVAILABLE

    @pytest.mark.parametrize('status', [
        Reservation.Status.SEATED,
        Reservation.Status.COMPLETED,
        Reservation.Status.CANCELLED,
        Reservation.Status.NO_SHOW,
    ])
    def test_closed_reservations_cannot_be_cancelled(self, pending_reservation, waiter, status):
        pending_reservation.status = status
        pending_reservation.save()

        with pytest.raises(InvalidState):
            ReservationService.cancel_reservation(pending_reservation.id, waiter)


@pytest.mark.django_db
@pytest.mark.business_logic
class TestLockOrder:
    """Tables are locked before reservations, matching seating."""

    def test_cancel_locks_table_first(self, lock_calls, confirmed_reservation, waiter):
        ReservationService.cancel_reservation(confirmed_reservation.id, waiter)

        assert lock_calls == ['table', 'reservation']

    def test_no_show_locks_table_first(self, lock_calls, confirmed_reservation, waiter):
        ReservationService.mark_no_show(confirmed_reservation.id, waiter)

        assert lock_calls == ['table', 'reservation']

    def test_cancel_without_table_locks_only_the_reservation(self, lock_calls, pending_reservation, waiter):
        ReservationService.cancel_reservation(pending_reservation.id, waiter)

        assert lock_calls == ['reservation']

    def test_manual_confirm_locks_table_first(self, lock_calls, pending_reservation, manager, table_four):
        ReservationService.confirm_reservation(pending_reservation.id, manager, table_id=table_four.id)

        assert lock_calls == ['table', 'reservation']

    def test_auto_assign_locks_candidates_first(self, lock_calls, pending_reservation, manager, table_two, table_four):
        reservation = ReservationService.confirm_reservation(pending_reservation.id, manager)

        assert reservation.table == table_two
        assert lock_calls == ['table', 'reservation']

    def test_table_assigned_between_read_and_lock_conflicts(
        self, monkeypatch, pending_reservation, table_four, waiter
    ):
        get_reservation = ReservationService.get_reservation

        def confirmed_meanwhile(reservation_id, lock=False):
            if lock:
                Reservation.objects.filter(pk=reservation_id).update(
                    table=table_four, status=Reservation.Status.CONFIRMED
                )
            return get_reservation(reservation_id, lock=lock)

        monkeypatch.setattr(ReservationService, 'get_reservation', staticmethod(confirmed_meanwhile))

        with pytest.raises(Conflict):
            ReservationService.cancel_reservation(pending_reservation.id, waiter)
