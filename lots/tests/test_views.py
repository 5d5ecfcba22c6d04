"""
Lots — API Integration Tests

@file lots/tests/test_views.py
"""

from datetime import date

import pytest
from django.urls import reverse
from rest_framework import status

from lots.models import FuelLot
from tests.factories import FuelLotFactory, StorageUnitFactory


pytestmark = pytest.mark.django_db

LIST_URL = 'api-v1:lots:lot-list'
PREVIEW_URL = 'api-v1:lots:lot-preview'


class TestLotCreate:

    def test_requires_authentication(self, api_client):
        unit = StorageUnitFactory()
        response = api_client.post(
            reverse(LIST_URL), {'unit': str(unit.pk), 'loaded_liters': 100}, format='json',
        )
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_create_lot(self, authenticated_client, user):
        unit = StorageUnitFactory(unit_code='4T1', capacity_liters=5000)
        response = authenticated_client.post(
            reverse(LIST_URL),
            {'unit': str(unit.pk), 'loaded_liters': 3400, 'load_date': '2025-11-25'},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body['success'] is True
        assert body['data']['lot_code'] == 'LOT25NOV254T1A3400'
        assert body['data']['seq_letters'] == 'A'
        assert body['data']['remaining_liters'] == 3400
        assert FuelLot.objects.get(pk=body['data']['id']).created_by == user

    def test_over_capacity_returns_400_envelope(self, authenticated_client):
        unit = StorageUnitFactory(capacity_liters=5000)
        response = authenticated_client.post(
            reverse(LIST_URL),
            {'unit': str(unit.pk), 'loaded_liters': 6000, 'load_date': '2025-11-25'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'VOLUME_OUT_OF_RANGE'
        assert FuelLot.objects.count() == 0

    def test_unknown_unit_returns_404(self, authenticated_client):
        response = authenticated_client.post(
            reverse(LIST_URL),
            {'unit': '00000000-0000-0000-0000-000000000000', 'loaded_liters': 100},
            format='json',
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['code'] == 'UNKNOWN_UNIT'

    def test_taken_lot_code_returns_409(self, authenticated_client):
        unit = StorageUnitFactory(unit_code='4T1')
        FuelLotFactory(
            unit=unit, load_date=date(2025, 11, 24), seq_index=1, loaded_liters=3400,
            lot_code='LOT25NOV254T1A3400',
        )
        response = authenticated_client.post(
            reverse(LIST_URL),
            {'unit': str(unit.pk), 'loaded_liters': 3400, 'load_date': '2025-11-25'},
            format='json',
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'LOT_CODE_CONFLICT'
        assert FuelLot.objects.count() == 1


class TestLotReadAndPreview:

    def test_list_filters_by_stock_status(self, authenticated_client):
        FuelLotFactory(loaded_liters=100)
        FuelLotFactory(loaded_liters=100, used_liters=100)
        response = authenticated_client.get(reverse(LIST_URL), {'stock_status': 'SOLD'})
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['meta']['count'] == 1
        assert body['data'][0]['stock_status'] == 'SOLD'

    def test_preview_reserves_nothing(self, authenticated_client):
        unit = StorageUnitFactory(unit_code='4T1')
        params = {'unit': str(unit.pk), 'loaded_liters': 3400, 'load_date': '2025-11-25'}
        first = authenticated_client.get(reverse(PREVIEW_URL), params)
        second = authenticated_client.get(reverse(PREVIEW_URL), params)
        assert first.status_code == status.HTTP_200_OK
        assert first.json()['data'] == {'lot_code': 'LOT25NOV254T1A3400', 'seq_index': 1}
        assert second.json()['data'] == first.json()['data']
        assert FuelLot.objects.count() == 0
