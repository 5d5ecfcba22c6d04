"""
Tests — Concurrent transfers: no overdraw on a shared source lot and no
deadlock when transfers cross between two units.

@file transfers/tests/test_concurrency.py
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection

from core.exceptions import InsufficientBalance
from lots.models import FuelLot
from tests.factories import FixedTankFactory, FuelLotFactory, StorageUnitFactory
from transfers.models import ActivityKind, FuelInternalTransfer, FuelSaleTransfer
from transfers.services import TransferService


pytestmark = pytest.mark.django_db(transaction=True)


def _run_in_threads(fn, count, workers=10):
    def worker(i):
        try:
            return fn(i)
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(worker, range(count)))


class TestConcurrentSales:

    def test_hundred_one_liter_sales_from_fifty_liter_lot(self):
        lot = FuelLotFactory(loaded_liters=50)

        def sell(i):
            try:
                TransferService.sell(
                    kind=ActivityKind.TANKER_TO_VEHICLE,
                    from_lot_id=lot.pk,
                    volume=1,
                    to_vehicle=f'V{i:03d}',
                )
                return 'ok'
            except InsufficientBalance:
                return 'insufficient'

        results = _run_in_threads(sell, 100)

        assert results.count('ok') == 50
        assert results.count('insufficient') == 50
        lot.refresh_from_db()
        assert lot.used_liters == 50
        assert lot.stock_status == FuelLot.StockStatus.SOLD
        assert FuelSaleTransfer.objects.filter(from_lot=lot).count() == 50


class TestConcurrentInternalTransfers:

    def test_crossing_transfers_complete(self):
        unit_a = StorageUnitFactory(capacity_liters=5000)
        unit_b = StorageUnitFactory(capacity_liters=5000)
        lot_a = FuelLotFactory(unit=unit_a, seq_index=1, loaded_liters=2000)
        lot_b = FuelLotFactory(unit=unit_b, seq_index=1, loaded_liters=2000)

        def move(i):
            source, destination = (lot_a, unit_b) if i % 2 == 0 else (lot_b, unit_a)
            return TransferService.transfer(
                kind=ActivityKind.TANKER_TO_TANKER,
                from_lot_id=source.pk,
                to_unit_id=destination.pk,
                volume=10,
            )

        records = _run_in_threads(move, 40)

        assert len(records) == 40
        assert FuelInternalTransfer.objects.count() == 40
        lot_a.refresh_from_db()
        lot_b.refresh_from_db()
        # Each lot gave 20 x 10 L and received 20 x 10 L as top-ups.
        assert (lot_a.used_liters, lot_a.loaded_liters) == (200, 2200)
        assert (lot_b.used_liters, lot_b.loaded_liters) == (200, 2200)

    def test_concurrent_transfers_into_empty_unit_create_one_lot_each(self):
        tankers = [StorageUnitFactory(capacity_liters=5000) for _ in range(5)]
        sources = [FuelLotFactory(unit=t, seq_index=1, loaded_liters=1000) for t in tankers]
        depot = FixedTankFactory(capacity_liters=20000)

        def move(i):
            return TransferService.transfer(
                kind=ActivityKind.TANKER_TO_FIXED,
                from_lot_id=sources[i % 5].pk,
                to_unit_id=depot.pk,
                volume=100,
            )

        _run_in_threads(move, 10)

        depot_lots = FuelLot.objects.filter(unit=depot)
        assert sum(lot.remaining_liters for lot in depot_lots) == 1000
        # The first transfer materialises the lot; every later one tops it up.
        assert depot_lots.count() == 1
        assert FuelInternalTransfer.objects.filter(transfer_to_empty=True).count() == 1


class TestSalesUnderDeferredTransactions:

    def test_source_lot_lock_alone_prevents_overdraw(self, deferred_transactions):
        lot = FuelLotFactory(loaded_liters=20)

        def sell(i):
            try:
                TransferService.sell(
                    kind=ActivityKind.TANKER_TO_VEHICLE,
                    from_lot_id=lot.pk,
                    volume=1,
                    to_vehicle=f'V{i:03d}',
                )
                return 'ok'
            except InsufficientBalance:
                return 'insufficient'

        results = _run_in_threads(sell, 40)

        assert results.count('ok') == 20
        assert results.count('insufficient') == 20
        lot.refresh_from_db()
        assert lot.used_liters == 20
        assert FuelSaleTransfer.objects.filter(from_lot=lot).count() == 20
