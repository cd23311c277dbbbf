"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: pure logic tests, no database")
    config.addinivalue_line("markers", "integration: API tests through the DRF stack")
    config.addinivalue_line("markers", "business_logic: service-level rules and state transitions")


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/menu-items/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def client_for(api_client):
    """
    Return a factory that authenticates the API client as the given staff user.

    Usage:
        def test_protected_endpoint(client_for, waiter):
            response = client_for(waiter).get('/api/tables/')
            assert response.status_code == 200
    """
    def _client_for(user):
        api_client.force_authenticate(user=user)
        return api_client

    return _client_for


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================
from core_backend.tests.fixtures import *
