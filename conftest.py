"""
FuelLedger — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from django.db import connection
from rest_framework.test import APIClient

from tests.factories import SuperuserFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active user with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Superuser with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as a superuser."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def fixed_clock(settings):
    """Pin the ledger clock to 2025-11-25 08:30 UTC."""
    settings.FUEL_LEDGER_CLOCK = 'tests.clock.FixedClock'
    return 'tests.clock.FixedClock'


@pytest.fixture
def deferred_transactions(transactional_db):
    """
    Open SQLite transactions with BEGIN DEFERRED. Writers are then no
    longer queued by the store at BEGIN, and two that overlap fail with
    "database is locked" unless the ledger's own locks keep them apart.
    """
    if connection.vendor != 'sqlite':
        pytest.skip('transaction modes are SQLite only')
    # Shared by every thread's connection.
    options = connection.settings_dict['OPTIONS']
    previous = options.get('transaction_mode')
    options['transaction_mode'] = 'DEFERRED'
    connection.close()
    yield
    connection.close()
    if previous is None:
        options.pop('transaction_mode', None)
    else:
        options['transaction_mode'] = previous
