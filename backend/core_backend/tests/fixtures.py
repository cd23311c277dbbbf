"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like staff users, tables, menu items, reservations and dining sessions.
"""
import pytest
from decimal import Decimal
from django.utils import timezone
from datetime import timedelta

from users.models import User
from customers.models import Customer
from menu.models import MenuItem
from tables.models import Table
from reservations.models import Reservation
from dining.models import DiningSession


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def manager(db):
    """Create a manager (full floor and admin access)"""
    return User.objects.create_user(
        email='manager@bistro.test',
        password='password123',
        first_name='Maya',
        last_name='Manager',
        role=User.Role.MANAGER,
    )


@pytest.fixture
def waiter(db):
    """Create a waiter"""
    return User.objects.create_user(
        email='waiter@bistro.test',
        password='password123',
        first_name='Wes',
        last_name='Waiter',
        role=User.Role.WAITER,
    )


@pytest.fixture
def cashier(db):
    """Create a cashier"""
    return User.objects.create_user(
        email='cashier@bistro.test',
        password='password123',
        first_name='Cam',
        last_name='Cashier',
        role=User.Role.CASHIER,
    )


@pytest.fixture
def kitchen_staff(db):
    """Create a kitchen staff member"""
    return User.objects.create_user(
        email='kitchen@bistro.test',
        password='password123',
        first_name='Kit',
        last_name='Chen',
        role=User.Role.KITCHEN_STAFF,
    )


# ============================================================================
# TABLE FIXTURES
# ============================================================================

@pytest.fixture
def table_two(db):
    """AVAILABLE two-top"""
    return Table.objects.create(number='B2', capacity=2)


@pytest.fixture
def table_four(db):
    """AVAILABLE four-top"""
    return Table.objects.create(number='A1', capacity=4)


@pytest.fixture
def table_six(db):
    """AVAILABLE six-top"""
    return Table.objects.create(number='C6', capacity=6)


# ============================================================================
# MENU FIXTURES
# ============================================================================

@pytest.fixture
def burger(db):
    return MenuItem.objects.create(name='Burger', price=Decimal('5.00'))


@pytest.fixture
def pasta(db):
    return MenuItem.objects.create(name='Pasta', price=Decimal('7.00'))


@pytest.fixture
def soup(db):
    return MenuItem.objects.create(name='Soup', price=Decimal('3.25'))


@pytest.fixture
def unavailable_item(db):
    return MenuItem.objects.create(name='Lobster', price=Decimal('30.00'), is_available=False)


# ============================================================================
# CUSTOMER / RESERVATION FIXTURES
# ============================================================================

@pytest.fixture
def customer(db):
    return Customer.objects.create(
        name='Ada Lovelace',
        phone_number='555-0100',
        email='ada@example.com',
    )


@pytest.fixture
def pending_reservation(customer):
    """PENDING reservation for two, one hour from now, no table"""
    return Reservation.objects.create(
        customer=customer,
        reservation_time=timezone.now() + timedelta(hours=1),
        party_size=2,
        status=Reservation.Status.PENDING,
    )


@pytest.fixture
def confirmed_reservation(customer, table_four, manager):
    """CONFIRMED reservation for two on table_four, which is RESERVED"""
    table_four.status = Table.Status.RESERVED
    table_four.save()
    return Reservation.objects.create(
        customer=customer,
        reservation_time=timezone.now() + timedelta(hours=1),
        party_size=2,
        table=table_four,
        status=Reservation.Status.CONFIRMED,
        confirmed_by=manager,
    )


# ============================================================================
# DINING SESSION FIXTURES
# ============================================================================

@pytest.fixture
def active_session(table_four, waiter):
    """ACTIVE walk-in session for three at table_four (OCCUPIED)"""
    table_four.status = Table.Status.OCCUPIED
    table_four.save()
    return DiningSession.objects.create(
        table=table_four,
        opened_by=waiter,
        party_identifier='Party of 3',
        party_size=3,
        status=DiningSession.Status.ACTIVE,
    )


# ============================================================================
# LOCK ORDER FIXTURES
# ============================================================================

@pytest.fixture
def lock_calls(monkeypatch):
    """
    Record the row locks taken through the service getters, in order.

    SQLite ignores SELECT ... FOR UPDATE, so tests assert the order the
    services ask for locks rather than the locks themselves.
    """
    from dining.services import DiningSessionService
    from menu.services import MenuItemService
    from orders.services import OrderItemService
    from reservations.services import ReservationService
    from tables.services import TableService

    calls = []

    def recording(name, getter):
        def _get(entity_id, lock=False):
            if lock:
                calls.append(name)
            return getter(entity_id, lock=lock)
        return staticmethod(_get)

    monkeypatch.setattr(TableService, 'get_table', recording('table', TableService.get_table))
    monkeypatch.setattr(
        ReservationService, 'get_reservation', recording('reservation', ReservationService.get_reservation)
    )
    monkeypatch.setattr(DiningSessionService, 'get_session', recording('session', DiningSessionService.get_session))
    monkeypatch.setattr(MenuItemService, 'get_item', recording('menu_item', MenuItemService.get_item))

    lock_candidates = ReservationService._lock_candidates
    lock_orders = OrderItemService._lock_orders

    def recording_lock_candidates(party_size):
        calls.append('table')
        return lock_candidates(party_size)

    def recording_lock_orders(order_ids):
        calls.append('orders')
        return lock_orders(order_ids)

    monkeypatch.setattr(ReservationService, '_lock_candidates', staticmethod(recording_lock_candidates))
    monkeypatch.setattr(OrderItemService, '_lock_orders', staticmethod(recording_lock_orders))
    return calls
