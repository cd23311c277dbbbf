"""
Bill generation, payment and voiding.
"""
import pytest
from decimal import Decimal

from billing.models import Bill
from billing.services import BillingService
from core_backend.exceptions import (
    InvalidInput,
    InvalidState,
    NotFound,
    PreconditionFailed,
)
from dining.models import DiningSession
from orders.models import Order, OrderItem
from orders.services import OrderService
from reservations.models import Reservation
from tables.models import Table


def _order(session, staff, item_status, *lines):
    """Place an order and force its items to `item_status`."""
    order = OrderService.create_order(
        session.id,
        [{'menu_item_id': item.id, 'quantity': qty} for item, qty in lines],
        staff,
    )
    order.items.update(status=item_status)
    return OrderService.sync_status(order)


@pytest.fixture
def served_session(active_session, waiter, pasta):
    _order(active_session, waiter, OrderItem.Status.SERVED, (pasta, 1))
    return active_session


@pytest.mark.django_db
@pytest.mark.business_logic
class TestGenerateBill:
    def test_amounts_and_session_billed(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)

        assert bill.subtotal == Decimal('7.00')
        assert bill.tax_amount == Decimal('0.70')
        assert bill.total_amount == Decimal('7.70')
        assert bill.status == Bill.Status.UNPAID
        assert bill.generated_by == cashier
        served_session.refresh_from_db()
        assert served_session.status == DiningSession.Status.BILLED

    def test_only_ready_and_served_items_are_billed(self, active_session, waiter, cashier, burger, pasta, soup):
        _order(active_session, waiter, OrderItem.Status.READY, (burger, 2))
        _order(active_session, waiter, OrderItem.Status.PREPARING, (pasta, 1))
        _order(active_session, waiter, OrderItem.Status.CANCELLED, (soup, 4))

        bill = BillingService.generate_bill(active_session.id, cashier)

        assert bill.subtotal == Decimal('10.00')

    def test_cancelled_order_is_not_billed(self, active_session, waiter, cashier, burger):
        order = _order(active_session, waiter, OrderItem.Status.READY, (burger, 1))
        Order.objects.filter(pk=order.pk).update(status=Order.Status.CANCELLED)

        bill = BillingService.generate_bill(active_session.id, cashier)

        assert bill.total_amount == Decimal('0.00')

    def test_regenerate_rewrites_the_same_bill(self, served_session, cashier):
        first = BillingService.generate_bill(served_session.id, cashier)
        second = BillingService.generate_bill(served_session.id, cashier)

        assert second.id == first.id
        assert Bill.objects.count() == 1
        served_session.refresh_from_db()
        assert served_session.status == DiningSession.Status.BILLED

    def test_regenerate_after_void_picks_up_new_orders(self, served_session, waiter, cashier, burger):
        bill = BillingService.generate_bill(served_session.id, cashier)
        BillingService.void_bill(bill.id, cashier)
        _order(served_session, waiter, OrderItem.Status.SERVED, (burger, 1))

        regenerated = BillingService.generate_bill(served_session.id, cashier)

        assert regenerated.id == bill.id
        assert regenerated.status == Bill.Status.UNPAID
        assert regenerated.subtotal == Decimal('12.00')

    def test_paid_bill_cannot_be_regenerated(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)
        Bill.objects.filter(pk=bill.pk).update(status=Bill.Status.PAID)

        with pytest.raises(PreconditionFailed):
            BillingService.generate_bill(served_session.id, cashier)

    def test_closed_session(self, served_session, cashier):
        DiningSession.objects.filter(pk=served_session.pk).update(status=DiningSession.Status.CLOSED)

        with pytest.raises(InvalidState):
            BillingService.generate_bill(served_session.id, cashier)

    def test_unknown_session(self, cashier):
        with pytest.raises(NotFound):
            BillingService.generate_bill(9999, cashier)


@pytest.mark.django_db
@pytest.mark.business_logic
class TestConfirmPayment:
    def test_payment_closes_out_the_visit(self, confirmed_reservation, waiter, cashier, table_four, pasta):
        from dining.services import DiningSessionService

        session = DiningSessionService.start_session(
            table_four.id, 2, waiter, reservation_id=confirmed_reservation.id
        )
        _order(session, waiter, OrderItem.Status.SERVED, (pasta, 1))
        bill = BillingService.generate_bill(session.id, cashier)

        paid = BillingService.confirm_payment(bill.id, ' Cash ', cashier, payment_notes='exact change')

        assert paid.status == Bill.Status.PAID
        assert paid.payment_method == 'Cash'
        assert paid.paid_confirmed_by == cashier
        assert paid.paid_at is not None
        session.refresh_from_db()
        assert session.status == DiningSession.Status.CLOSED
        assert session.end_time is not None
        table_four.refresh_from_db()
        assert table_four.status == Table.Status.AVAILABLE
        confirmed_reservation.refresh_from_db()
        assert confirmed_reservation.status == Reservation.Status.COMPLETED

    def test_payment_locks_floor_rows_in_order(
        self, lock_calls, confirmed_reservation, waiter, cashier, table_four, pasta
    ):
        from dining.services import DiningSessionService

        session = DiningSessionService.start_session(
            table_four.id, 2, waiter, reservation_id=confirmed_reservation.id
        )
        _order(session, waiter, OrderItem.Status.SERVED, (pasta, 1))
        bill = BillingService.generate_bill(session.id, cashier)
        lock_calls.clear()

        BillingService.confirm_payment(bill.id, 'Card', cashier)

        assert lock_calls == ['table', 'reservation', 'session']

    def test_pay_twice(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)
        BillingService.confirm_payment(bill.id, 'Card', cashier)

        with pytest.raises(PreconditionFailed):
            BillingService.confirm_payment(bill.id, 'Card', cashier)

    def test_void_bill_cannot_be_paid(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)
        BillingService.void_bill(bill.id, cashier)

        with pytest.raises(PreconditionFailed):
            BillingService.confirm_payment(bill.id, 'Card', cashier)

    def test_payment_method_required(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)

        with pytest.raises(InvalidInput):
            BillingService.confirm_payment(bill.id, '   ', cashier)

        bill.refresh_from_db()
        assert bill.status == Bill.Status.UNPAID

    def test_unknown_bill(self, cashier):
        with pytest.raises(NotFound):
            BillingService.confirm_payment(9999, 'Cash', cashier)


@pytest.mark.django_db
@pytest.mark.business_logic
class TestVoidBill:
    def test_void_reopens_session(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)

        voided = BillingService.void_bill(bill.id, cashier)

        assert voided.status == Bill.Status.VOID
        served_session.refresh_from_db()
        assert served_session.status == DiningSession.Status.ACTIVE

    def test_paid_bill_cannot_be_voided(self, served_session, cashier):
        bill = BillingService.generate_bill(served_session.id, cashier)
        BillingService.confirm_payment(bill.id, 'Cash', cashier)

        with pytest.raises(InvalidState):
            BillingService.void_bill(bill.id, cashier)
