"""
Menu availability tests: the toggle and the sold-out cascade it triggers.
"""
import pytest

from core_backend.exceptions import InvalidInput, NotFound
from menu.services import MenuItemService
from orders.models import Order, OrderItem
from orders.services import OrderService


@pytest.mark.django_db
@pytest.mark.business_logic
class TestSetAvailability:
    def test_unavailable_sells_out_in_flight_lines(self, active_session, waiter, kitchen_staff, burger, soup):
        order = OrderService.create_order(
            active_session.id,
            [{'menu_item_id': burger.id, 'quantity': 2}, {'menu_item_id': soup.id, 'quantity': 1}],
            waiter,
        )

        result = MenuItemService.set_availability(burger.id, False, staff=kitchen_staff)

        burger.refresh_from_db()
        assert burger.is_available is False
        assert result['affected_order_ids'] == [order.id]
        order.refresh_from_db()
        assert order.status == Order.Status.ACTION_REQUIRED
        assert order.items.get(menu_item=burger).status == OrderItem.Status.SOLD_OUT
        assert order.items.get(menu_item=soup).status == OrderItem.Status.PENDING

    def test_unavailable_without_orders_is_a_no_op_on_orders(self, burger):
        result = MenuItemService.set_availability(burger.id, False)

        assert result['affected_order_ids'] == []
        assert Order.objects.count() == 0

    def test_available_again_triggers_nothing(self, active_session, waiter, burger):
        order = OrderService.create_order(
            active_session.id, [{'menu_item_id': burger.id, 'quantity': 1}], waiter
        )
        MenuItemService.set_availability(burger.id, False)

        result = MenuItemService.set_availability(burger.id, True)

        burger.refresh_from_db()
        assert burger.is_available is True
        assert result['affected_order_ids'] == []
        # Sold out lines stay sold out until staff resolve the order
        order.refresh_from_db()
        assert order.status == Order.Status.ACTION_REQUIRED

    def test_missing_item(self):
        with pytest.raises(NotFound):
            MenuItemService.set_availability(12345, False)

    def test_flag_must_be_boolean(self, burger):
        with pytest.raises(InvalidInput):
            MenuItemService.set_availability(burger.id, 'no')
