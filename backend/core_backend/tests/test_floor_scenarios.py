"""
End-to-end floor scenarios through the REST API: seating walk-ins and
bookings, ordering through a sell-out, and paying the bill.
"""
import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone

from tables.models import Table


@pytest.mark.django_db
@pytest.mark.integration
class TestFloorScenarios:
    def test_walk_in_blocks_second_session(self, client_for, manager):
        client = client_for(manager)
        table = client.post('/api/tables/', {'number': 'A1', 'capacity': 4}, format='json').data

        session = client.post('/api/dining-sessions/', {'table_id': table['id'], 'party_size': 4}, format='json')
        second = client.post('/api/dining-sessions/', {'table_id': table['id'], 'party_size': 2}, format='json')

        assert session.status_code == 201
        assert session.data['status'] == 'ACTIVE'
        assert Table.objects.get(pk=table['id']).status == Table.Status.OCCUPIED
        assert second.status_code in (400, 409)
        assert second.data['error']['code'] in ('CONFLICT', 'INVALID_STATE')

    def test_booking_to_seating(self, api_client, client_for, waiter, table_two):
        booking = api_client.post(
            '/api/reservations/',
            {
                'customer_name': 'Grace Hopper',
                'phone_number': '555-0142',
                'reservation_time': (timezone.now() + timedelta(hours=1)).isoformat(),
                'party_size': 2,
            },
            format='json',
        ).data
        client = client_for(waiter)

        confirmed = client.post(f"/api/reservations/{booking['id']}/confirm/", {}, format='json')

        assert confirmed.data['status'] == 'CONFIRMED'
        assert confirmed.data['table'] == table_two.id
        table_two.refresh_from_db()
        assert table_two.status == Table.Status.RESERVED

        session = client.post(
            '/api/dining-sessions/',
            {'table_id': table_two.id, 'party_size': 2, 'reservation_id': booking['id']},
            format='json',
        )

        assert session.status_code == 201
        assert session.data['table']['status'] == 'OCCUPIED'
        assert client.get(f"/api/reservations/{booking['id']}/").data['status'] == 'SEATED'

    def test_sell_out_resolve_serve_and_pay(self, client_for, waiter, kitchen_staff, cashier, active_session, burger, pasta):
        floor = client_for(waiter)

        # Two lines of the same dish
        order = floor.post(
            f'/api/dining-sessions/{active_session.id}/orders/',
            {'items': [
                {'menu_item_id': burger.id, 'quantity': 1},
                {'menu_item_id': burger.id, 'quantity': 1},
            ]},
            format='json',
        ).data
        assert order['status'] == 'PENDING'
        assert sum(Decimal(i['line_total']) for i in order['items']) == Decimal('10.00')

        kitchen = client_for(kitchen_staff)
        sold_out = kitchen.post(f'/api/menu-items/{burger.id}/availability/', {'is_available': False}, format='json')
        assert sold_out.data['affected_order_ids'] == [order['id']]

        flagged = kitchen.get(f"/api/orders/{order['id']}/").data
        assert flagged['status'] == 'ACTION_REQUIRED'
        assert {i['status'] for i in flagged['items']} == {'SOLD_OUT'}

        floor = client_for(waiter)
        resolved = floor.post(
            f"/api/orders/{order['id']}/resolve/",
            {
                'cancel_item_ids': [i['id'] for i in flagged['items']],
                'add_items': [{'menu_item_id': pasta.id, 'quantity': 1}],
            },
            format='json',
        ).data
        assert resolved['status'] == 'PENDING'
        statuses = sorted(i['status'] for i in resolved['items'])
        assert statuses == ['CANCELLED', 'CANCELLED', 'PENDING']

        [new_item] = [i for i in resolved['items'] if i['status'] == 'PENDING']
        kitchen = client_for(kitchen_staff)
        for step in ('PREPARING', 'READY'):
            assert kitchen.post(f"/api/order-items/{new_item['id']}/status/", {'status': step}, format='json').status_code == 200
        floor = client_for(waiter)
        floor.post(f"/api/order-items/{new_item['id']}/status/", {'status': 'SERVED'}, format='json')
        assert floor.get(f"/api/orders/{order['id']}/").data['status'] == 'SERVED'

        till = client_for(cashier)
        bill = till.post(f'/api/dining-sessions/{active_session.id}/bill/').data
        assert (Decimal(bill['subtotal']), Decimal(bill['tax_amount']), Decimal(bill['total_amount'])) == (
            Decimal('7.00'), Decimal('0.70'), Decimal('7.70')
        )
        assert bill['status'] == 'UNPAID'
        assert bill['dining_session']['status'] == 'BILLED'

        paid = till.post(f"/api/bills/{bill['id']}/pay/", {'payment_method': 'Cash'}, format='json').data
        assert paid['status'] == 'PAID'
        assert paid['dining_session']['status'] == 'CLOSED'
        assert paid['dining_session']['table']['status'] == 'AVAILABLE'

        again = till.post(f'/api/dining-sessions/{active_session.id}/bill/')
        assert again.status_code == 400
        assert again.data['error']['code'] == 'PRECONDITION'

    def test_cancel_unassigned_booking(self, client_for, waiter, pending_reservation, table_two):
        response = client_for(waiter).post(f'/api/reservations/{pending_reservation.id}/cancel/')

        assert response.data['status'] == 'CANCELLED'
        assert response.data['table'] is None
        table_two.refresh_from_db()
        assert table_two.status == Table.Status.AVAILABLE
