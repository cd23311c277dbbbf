import pytest
from decimal import Decimal


@pytest.mark.django_db
@pytest.mark.integration
class TestMenuAPI:
    def test_public_menu_hides_unavailable_items(self, api_client, burger, unavailable_item):
        response = api_client.get('/api/menu-items/')

        assert response.status_code == 200
        names = [item['name'] for item in response.data['results']]
        assert names == ['Burger']

    def test_staff_see_everything(self, client_for, waiter, burger, unavailable_item):
        response = client_for(waiter).get('/api/menu-items/')

        assert response.data['count'] == 2

    def test_menu_is_read_only(self, client_for, manager):
        response = client_for(manager).post('/api/menu-items/', {'name': 'Tea', 'price': '2.00'}, format='json')

        assert response.status_code == 405

    def test_kitchen_toggles_availability(self, client_for, kitchen_staff, burger):
        response = client_for(kitchen_staff).post(
            f'/api/menu-items/{burger.id}/availability/', {'is_available': False}, format='json'
        )

        assert response.status_code == 200
        assert response.data['menu_item']['is_available'] is False
        assert response.data['affected_order_ids'] == []
        assert Decimal(response.data['menu_item']['price']) == Decimal('5.00')

    def test_waiter_cannot_toggle_availability(self, client_for, waiter, burger):
        response = client_for(waiter).post(
            f'/api/menu-items/{burger.id}/availability/', {'is_available': False}, format='json'
        )

        assert response.status_code == 403
