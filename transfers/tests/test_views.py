"""
Transfers — API Integration Tests

@file transfers/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from lots.models import FuelLot
from tests.factories import FixedTankFactory, FuelLotFactory, StorageUnitFactory
from transfers.models import FuelSaleTransfer


pytestmark = pytest.mark.django_db

CREATE_URL = 'api-v1:transfers:transfer-create'


@pytest.fixture
def lot():
    return FuelLotFactory(unit=StorageUnitFactory(capacity_liters=5000), loaded_liters=3400)


class TestTransferCreate:

    def test_sale(self, authenticated_client, user, lot):
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {
                'kind': 'TANKER_TO_VEHICLE',
                'from_lot': str(lot.pk),
                'volume_liters': 400,
                'to_vehicle': 'B1234A',
                'trip': 1,
                'op_date': '2025-11-25',
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['to_vehicle'] == 'B1234A'
        assert data['sale_date'] == '2025-11-25'
        assert data['from_lot_code_change'] == f'{lot.lot_code}-400'
        assert FuelSaleTransfer.objects.get(pk=data['id']).performed_by == user

    def test_internal_to_empty_depot(self, authenticated_client, lot):
        depot = FixedTankFactory()
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {
                'kind': 'TANKER_TO_FIXED',
                'from_lot': str(lot.pk),
                'to_unit': str(depot.pk),
                'volume_liters': 1000,
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['transfer_to_empty'] is True
        assert FuelLot.objects.get(pk=data['to_lot']).loaded_liters == 1000

    def test_testing_draw(self, authenticated_client, lot):
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {'kind': 'TESTING', 'from_lot': str(lot.pk), 'volume_liters': 2},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['data']['activity'] == 'TESTING'

    def test_overdraw_returns_409(self, authenticated_client, lot):
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {
                'kind': 'TANKER_TO_VEHICLE',
                'from_lot': str(lot.pk),
                'volume_liters': 3401,
                'to_vehicle': 'B1234A',
            },
            format='json',
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'INSUFFICIENT_BALANCE'
        lot.refresh_from_db()
        assert lot.used_liters == 0

    def test_kind_mismatch_returns_400(self, authenticated_client, lot):
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {
                'kind': 'FIXED_TO_VEHICLE',
                'from_lot': str(lot.pk),
                'volume_liters': 10,
                'to_vehicle': 'B1234A',
            },
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['code'] == 'INVALID_TRANSFER_KIND'

    def test_unknown_lot_returns_404(self, authenticated_client):
        response = authenticated_client.post(
            reverse(CREATE_URL),
            {
                'kind': 'TESTING',
                'from_lot': '00000000-0000-0000-0000-000000000000',
                'volume_liters': 1,
            },
            format='json',
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['code'] == 'LOT_NOT_FOUND'

    def test_requires_authentication(self, api_client, lot):
        response = api_client.post(
            reverse(CREATE_URL),
            {'kind': 'TESTING', 'from_lot': str(lot.pk), 'volume_liters': 1},
            format='json',
        )
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)


class TestTransferLists:

    def test_sales_list_excludes_testing(self, authenticated_client, lot):
        for payload in (
            {'kind': 'TANKER_TO_VEHICLE', 'to_vehicle': 'B1'},
            {'kind': 'TESTING'},
        ):
            authenticated_client.post(
                reverse(CREATE_URL),
                {'from_lot': str(lot.pk), 'volume_liters': 5, **payload},
                format='json',
            )

        sales = authenticated_client.get(reverse('api-v1:transfers:sale-list')).json()
        testing = authenticated_client.get(reverse('api-v1:transfers:testing-list')).json()
        internal = authenticated_client.get(reverse('api-v1:transfers:internal-list')).json()

        assert sales['meta']['count'] == 1
        assert testing['meta']['count'] == 1
        assert internal['meta']['count'] == 0
