"""
Transfers — Service Layer

Transfer Engine: every transfer debits its source lot; internal
transfers also credit the destination unit's open lot, or create a
fresh EMPTY_TRANSFER lot when the unit has none. Debit, credit, the
transfer record and the activity event commit together or not at all.

Locks are taken in one order: the source lot key, the destination
unit's receive key, then row locks on the lots touched in ascending
primary-key order, and last the sequence key when a lot is created.
Two transfers crossing the same pair of lots therefore cannot deadlock.

@file transfers/services.py
"""

import logging
from datetime import date

from core.clock import get_clock
from core.constants import (
    ACTIVITY_ACTION_CREATE,
    ACTIVITY_ENTITY_INTERNAL_TRANSFER,
    ACTIVITY_ENTITY_SALE,
    ACTIVITY_ENTITY_TESTING,
)
from core.exceptions import BusinessRuleViolation, InvalidTransferKind, VolumeOutOfRange
from core.locks import locked_atomic
from core.services import ActivityTrailService
from lots.codes import credit_code_change, debit_code_change
from lots.models import FuelLot
from lots.services import LotService, lot_lock_key
from units.models import StorageUnit
from units.services import UnitRegistry

from .models import (
    INTERNAL_KINDS,
    SALE_KINDS,
    ActivityKind,
    FuelInternalTransfer,
    FuelSaleTransfer,
    TestingSelfTransfer,
)

logger = logging.getLogger('fuelledger')

# Unit type the source lot must sit in; None means any.
SOURCE_UNIT_TYPE = {
    ActivityKind.TANKER_TO_TANKER: StorageUnit.UnitType.TANKER,
    ActivityKind.TANKER_TO_FIXED: StorageUnit.UnitType.TANKER,
    ActivityKind.TANKER_TO_VEHICLE: StorageUnit.UnitType.TANKER,
    ActivityKind.FIXED_TO_VEHICLE: StorageUnit.UnitType.FIXED_TANK,
    ActivityKind.TESTING: None,
}

DESTINATION_UNIT_TYPE = {
    ActivityKind.TANKER_TO_TANKER: StorageUnit.UnitType.TANKER,
    ActivityKind.TANKER_TO_FIXED: StorageUnit.UnitType.FIXED_TANK,
}


def _parse_kind(kind) -> ActivityKind:
    try:
        return ActivityKind(kind)
    except ValueError:
        raise InvalidTransferKind(detail=f'Unknown transfer kind {kind!r}.')


def _check_source(kind: ActivityKind, source: FuelLot) -> None:
    expected = SOURCE_UNIT_TYPE[kind]
    if expected is not None and source.unit.unit_type != expected:
        raise InvalidTransferKind(
            detail=(
                f'{kind.value} requires a {expected} source; '
                f'{source.unit_code} is a {source.unit.unit_type}.'
            ),
        )


def _check_destination(kind: ActivityKind, source: FuelLot, to_unit: StorageUnit) -> None:
    if to_unit.pk == source.unit_id:
        raise InvalidTransferKind(detail='Source and destination unit must differ.')
    if not to_unit.active:
        raise InvalidTransferKind(detail=f'Destination unit {to_unit.unit_code} is inactive.')
    expected = DESTINATION_UNIT_TYPE[kind]
    if to_unit.unit_type != expected:
        raise InvalidTransferKind(
            detail=(
                f'{kind.value} requires a {expected} destination; '
                f'{to_unit.unit_code} is a {to_unit.unit_type}.'
            ),
        )


class TransferService:
    """Moves volume out of lots: internal transfers, sales and testing draws."""

    @staticmethod
    def transfer(
        *,
        kind,
        from_lot_id,
        volume: int,
        to_unit_id=None,
        to_vehicle: str = '',
        driver_name: str = '',
        trip: int | None = None,
        op_date: date | None = None,
        performed_by=None,
    ):
        """
        Apply one transfer and return its record
        (FuelInternalTransfer, FuelSaleTransfer or TestingSelfTransfer).

        Raises InvalidTransferKind, VolumeOutOfRange, LotNotFound,
        UnknownUnit or InsufficientBalance; nothing is persisted on error.
        """
        kind = _parse_kind(kind)
        if volume is None or volume <= 0:
            raise VolumeOutOfRange(detail='Transfer volume must be positive.')

        to_vehicle = (to_vehicle or '').strip()
        if kind in SALE_KINDS and not to_vehicle:
            raise BusinessRuleViolation(detail='to_vehicle is required for a sale.')
        if kind in INTERNAL_KINDS and to_unit_id is None:
            raise InvalidTransferKind(detail=f'{kind.value} requires a destination unit.')
        if kind not in INTERNAL_KINDS and to_unit_id is not None:
            raise InvalidTransferKind(detail=f'{kind.value} does not take a destination unit.')

        clock = get_clock()
        op_date = op_date or clock.today()
        performed_at = clock.now()

        with locked_atomic(*lot_lock_key(from_lot_id)):
            source = LotService.get_lot(from_lot_id)
            _check_source(kind, source)

            if kind in INTERNAL_KINDS:
                record = TransferService._internal(
                    kind=kind,
                    source=source,
                    to_unit=UnitRegistry.get_unit(to_unit_id),
                    volume=volume,
                    driver_name=driver_name,
                    op_date=op_date,
                    performed_at=performed_at,
                    performed_by=performed_by,
                )
            else:
                source = LotService.debit_lot(source.pk, volume, testing=kind == ActivityKind.TESTING)
                common = dict(
                    activity=kind,
                    from_unit_id=source.unit_id,
                    from_unit_code=source.unit_code,
                    from_lot=source,
                    from_lot_code_change=debit_code_change(source.lot_code, source.used_liters),
                    volume_liters=volume,
                    driver_name=driver_name,
                    performed_at=performed_at,
                    performed_by=performed_by,
                )
                if kind in SALE_KINDS:
                    record = FuelSaleTransfer.objects.create(
                        sale_date=op_date, to_vehicle=to_vehicle, trip=trip, **common,
                    )
                else:
                    record = TestingSelfTransfer.objects.create(
                        test_date=op_date, to_vehicle=to_vehicle, **common,
                    )

            TransferService._emit(record, op_date)

        logger.info(
            'Transfer %s %s: %d L from %s (%s)',
            record.pk, kind.value, volume, record.from_unit_code, record.from_lot_code_change,
        )
        return record

    @staticmethod
    def _internal(
        *,
        kind: ActivityKind,
        source: FuelLot,
        to_unit: StorageUnit,
        volume: int,
        driver_name: str,
        op_date: date,
        performed_at,
        performed_by,
    ) -> FuelInternalTransfer:
        _check_destination(kind, source, to_unit)

        # Receivers of one unit run one at a time; an empty unit gets one new lot.
        with locked_atomic('unit-receive', str(to_unit.pk)):
            # The open lot may be drawn down to SOLD between lookup and lock;
            # look again until the locked candidate is still open.
            while True:
                open_lot = LotService.open_lot_for_unit(to_unit.pk)
                locked = LotService.lock_lots([source.pk, open_lot.pk if open_lot else None])
                if open_lot is None or not locked[open_lot.pk].is_sold:
                    break

            source = LotService.debit_lot(source.pk, volume)

            if open_lot is not None:
                destination = LotService.credit_lot(open_lot.pk, volume)
                to_change = credit_code_change(destination.lot_code, volume)
                to_empty = False
            else:
                destination = LotService.create_lot(
                    unit_id=to_unit.pk,
                    loaded_liters=volume,
                    load_date=op_date,
                    load_time=performed_at,
                    load_type=FuelLot.LoadType.EMPTY_TRANSFER,
                    actor=performed_by,
                )
                to_change = destination.lot_code
                to_empty = True

            return FuelInternalTransfer.objects.create(
                activity=kind,
                from_unit_id=source.unit_id,
                from_unit_code=source.unit_code,
                from_lot=source,
                from_lot_code_change=debit_code_change(source.lot_code, source.used_liters),
                volume_liters=volume,
                driver_name=driver_name,
                performed_at=performed_at,
                performed_by=performed_by,
                transfer_date=op_date,
                to_unit=to_unit,
                to_unit_code=to_unit.unit_code,
                to_lot=destination,
                to_lot_code_change=to_change,
                transfer_to_empty=to_empty,
            )

    @staticmethod
    def _emit(record, op_date: date) -> None:
        payload = {
            'activity': record.activity,
            'from_lot_id': str(record.from_lot_id),
            'from_lot_code_change': record.from_lot_code_change,
        }
        if isinstance(record, FuelInternalTransfer):
            entity_type = ACTIVITY_ENTITY_INTERNAL_TRANSFER
            payload.update({
                'to_unit_id': str(record.to_unit_id),
                'to_lot_id': str(record.to_lot_id),
                'to_lot_code_change': record.to_lot_code_change,
                'transfer_to_empty': record.transfer_to_empty,
            })
        elif isinstance(record, FuelSaleTransfer):
            entity_type = ACTIVITY_ENTITY_SALE
            payload.update({'to_vehicle': record.to_vehicle, 'trip': record.trip})
        else:
            entity_type = ACTIVITY_ENTITY_TESTING
            payload['to_vehicle'] = record.to_vehicle

        ActivityTrailService.emit(
            action=ACTIVITY_ACTION_CREATE,
            entity_type=entity_type,
            entity_id=str(record.pk),
            unit_id=str(record.from_unit_id),
            op_date=op_date.isoformat(),
            amount_liters=record.volume_liters,
            payload=payload,
            actor_id=record.performed_by_id,
        )

    # -----------------------------------------------------------------------
    # Per-kind entry points
    # -----------------------------------------------------------------------

    @staticmethod
    def internal_transfer(*, kind, from_lot_id, to_unit_id, volume: int, **extra) -> FuelInternalTransfer:
        if _parse_kind(kind) not in INTERNAL_KINDS:
            raise InvalidTransferKind(detail=f'{kind} is not an internal transfer kind.')
        return TransferService.transfer(
            kind=kind, from_lot_id=from_lot_id, to_unit_id=to_unit_id, volume=volume, **extra,
        )

    @staticmethod
    def sell(*, kind, from_lot_id, volume: int, to_vehicle: str, **extra) -> FuelSaleTransfer:
        if _parse_kind(kind) not in SALE_KINDS:
            raise InvalidTransferKind(detail=f'{kind} is not a sale kind.')
        return TransferService.transfer(
            kind=kind, from_lot_id=from_lot_id, volume=volume, to_vehicle=to_vehicle, **extra,
        )

    @staticmethod
    def record_testing(*, from_lot_id, volume: int, **extra) -> TestingSelfTransfer:
        return TransferService.transfer(
            kind=ActivityKind.TESTING, from_lot_id=from_lot_id, volume=volume, **extra,
        )
