"""
Sold-out cascade tests.

A menu item going unavailable, or the kitchen marking one line SOLD_OUT,
must sell out every other in-flight line of that dish and flag the orders.
"""
import pytest

from dining.models import DiningSession
from orders.models import Order, OrderItem
from orders.services import OrderItemService, OrderService
from tables.models import Table


@pytest.fixture
def second_session(table_six, waiter):
    table_six.status = Table.Status.OCCUPIED
    table_six.save()
    return DiningSession.objects.create(
        table=table_six, opened_by=waiter, party_identifier='Party of 5', party_size=5,
    )


def _order(session, staff, *lines):
    return OrderService.create_order(
        session.id, [{'menu_item_id': item.id, 'quantity': 1} for item in lines], staff
    )


@pytest.mark.django_db
@pytest.mark.business_logic
class TestForceSoldOut:
    def test_only_in_flight_lines_of_open_orders(self, active_session, second_session, waiter, burger, soup):
        pending = _order(active_session, waiter, burger, soup)
        preparing = _order(second_session, waiter, burger)
        OrderService.update_order_status(preparing.id, Order.Status.PREPARING, waiter)
        ready = _order(second_session, waiter, burger)
        OrderService.update_order_status(ready.id, Order.Status.PREPARING, waiter)
        OrderService.update_order_status(ready.id, Order.Status.READY, waiter)

        affected = OrderItemService.force_sold_out(burger.id)

        assert affected == {pending.id, preparing.id}
        for order in (pending, preparing):
            order.refresh_from_db()
            assert order.status == Order.Status.ACTION_REQUIRED
            assert order.items.get(menu_item=burger).status == OrderItem.Status.SOLD_OUT
        # Other dishes on the same order are untouched
        assert pending.items.get(menu_item=soup).status == OrderItem.Status.PENDING
        # READY food is already made
        ready.refresh_from_db()
        assert ready.status == Order.Status.READY
        assert ready.items.get().status == OrderItem.Status.READY

    def test_no_in_flight_lines_is_a_no_op(self, burger):
        assert OrderItemService.force_sold_out(burger.id) == set()

    def test_cancelled_order_is_not_touched(self, active_session, waiter, burger):
        order = _order(active_session, waiter, burger)
        OrderItem.objects.filter(order=order).update(status=OrderItem.Status.PENDING)
        Order.objects.filter(pk=order.pk).update(status=Order.Status.CANCELLED)

        assert OrderItemService.force_sold_out(burger.id) == set()


@pytest.mark.django_db
@pytest.mark.business_logic
class TestItemSoldOutPropagation:
    def test_marking_one_line_sold_out_spreads_to_other_orders(
        self, active_session, second_session, waiter, kitchen_staff, burger
    ):
        first = _order(active_session, waiter, burger)
        second = _order(second_session, waiter, burger)

        item = OrderItemService.update_item_status(
            first.items.get().id, OrderItem.Status.SOLD_OUT, kitchen_staff
        )

        assert item.status == OrderItem.Status.SOLD_OUT
        for order in (first, second):
            order.refresh_from_db()
            assert order.status == Order.Status.ACTION_REQUIRED
            assert order.items.get().status == OrderItem.Status.SOLD_OUT

    def test_propagation_leaves_other_dishes_alone(self, active_session, waiter, kitchen_staff, burger, soup):
        first = _order(active_session, waiter, burger)
        other = _order(active_session, waiter, soup)

        OrderItemService.update_item_status(first.items.get().id, OrderItem.Status.SOLD_OUT, kitchen_staff)

        other.refresh_from_db()
        assert other.status == Order.Status.PENDING


@pytest.mark.django_db
@pytest.mark.business_logic
class TestKitchenLockOrder:
    """Menu item first, then orders by id, so cascades and item updates cannot cross."""

    def test_item_sold_out_locks_menu_item_then_orders(
        self, lock_calls, active_session, second_session, waiter, kitchen_staff, burger
    ):
        first = _order(active_session, waiter, burger)
        _order(second_session, waiter, burger)
        lock_calls.clear()

        OrderItemService.update_item_status(first.items.get().id, OrderItem.Status.SOLD_OUT, kitchen_staff)

        assert lock_calls[0] == 'menu_item'
        assert set(lock_calls[1:]) == {'orders'}

    def test_plain_item_update_skips_the_menu_item(self, lock_calls, active_session, waiter, kitchen_staff, burger):
        order = _order(active_session, waiter, burger)
        lock_calls.clear()

        OrderItemService.update_item_status(order.items.get().id, OrderItem.Status.PREPARING, kitchen_staff)

        assert lock_calls == ['orders']

    def test_availability_flip_locks_menu_item_then_orders(self, lock_calls, active_session, waiter, burger):
        from menu.services import MenuItemService

        _order(active_session, waiter, burger)
        lock_calls.clear()

        MenuItemService.set_availability(burger.id, False)

        assert lock_calls == ['menu_item', 'orders']
