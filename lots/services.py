"""
Lots — Service Layer

Lot Sequencer and Lot Ledger: sequence allocation per (unit, load_date),
lot creation, and the debit/credit primitives the Transfer Engine builds
on. Every mutation runs in one transaction; any error rolls it back
completely, so a sequence number is never burned without a lot and a
debit is never half-applied.

@file lots/services.py
"""

import logging
import uuid
from datetime import date, datetime

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, models, transaction
from django.db.models import Case, F, Max, Sum, Value, When
from django.utils import timezone

from core.clock import get_clock
from core.constants import ACTIVITY_ACTION_CREATE, ACTIVITY_ENTITY_LOT
from core.exceptions import (
    BusinessRuleViolation,
    InsufficientBalance,
    LotCodeConflict,
    LotNotFound,
    SequenceContention,
    VolumeOutOfRange,
)
from core.locks import locked_atomic
from core.services import ActivityTrailService
from units.services import UnitRegistry

from .codes import gen_lot_code, seq_index_to_letters
from .models import FuelLot, LotSequence

logger = logging.getLogger('fuelledger')


def _sequence_lock_key(unit_id, load_date: date) -> tuple:
    return ('lot-seq', str(unit_id), load_date.isoformat())


def lot_lock_key(lot_id) -> tuple:
    """Same key for every spelling of one lot id."""
    try:
        lot_id = uuid.UUID(str(lot_id))
    except ValueError:
        # Malformed ids fail the lookup made under the lock.
        pass
    return ('lot', str(lot_id))


class LotSequencer:
    """Per-(unit, load_date) sequence allocation: 1, 2, 3, ... with no gaps."""

    @staticmethod
    def next_seq_index(unit_id, load_date: date) -> int:
        """
        Reserve the next sequence index for (unit_id, load_date).

        The reservation belongs to the caller's transaction: if it rolls
        back, so does the reservation.
        """
        attempts = settings.LOT_SEQUENCE_MAX_ATTEMPTS
        with locked_atomic(*_sequence_lock_key(unit_id, load_date)):
            for attempt in range(1, attempts + 1):
                try:
                    return LotSequencer._claim(unit_id, load_date)
                except SequenceContention:
                    logger.warning(
                        'Sequence contention for unit=%s date=%s (attempt %d/%d)',
                        unit_id, load_date, attempt, attempts,
                    )
        raise SequenceContention(
            f'Could not allocate a sequence for unit {unit_id} on {load_date} after {attempts} attempts.'
        )

    @staticmethod
    def preview(unit_id, load_date: date) -> int:
        """Next index as of now. Non-binding: a concurrent create may take it first."""
        counter = LotSequence.objects.filter(unit_id=unit_id, load_date=load_date).first()
        if counter is not None:
            return counter.last_index + 1
        return LotSequencer._max_assigned(unit_id, load_date) + 1

    @staticmethod
    def _max_assigned(unit_id, load_date: date) -> int:
        result = FuelLot.objects.filter(
            unit_id=unit_id, load_date=load_date,
        ).aggregate(max_seq=Max('seq_index'))
        return result['max_seq'] or 0

    @staticmethod
    def _claim(unit_id, load_date: date) -> int:
        counter = (
            LotSequence.objects
            .select_for_update()
            .filter(unit_id=unit_id, load_date=load_date)
            .first()
        )
        if counter is None:
            # Lots inserted before the counter existed still count.
            start = LotSequencer._max_assigned(unit_id, load_date)
            try:
                with transaction.atomic():
                    counter = LotSequence.objects.create(
                        unit_id=unit_id, load_date=load_date, last_index=start,
                    )
            except IntegrityError as exc:
                raise SequenceContention(str(exc)) from exc

        LotSequence.objects.filter(pk=counter.pk).update(
            last_index=F('last_index') + 1,
            updated_at=timezone.now(),
        )
        counter.refresh_from_db(fields=['last_index'])
        return counter.last_index


class LotService:
    """Lot Ledger: creation, balance tracking, in-stock/sold status."""

    @staticmethod
    def get_lot(lot_id) -> FuelLot:
        try:
            return FuelLot.objects.select_related('unit').get(pk=lot_id)
        except (FuelLot.DoesNotExist, DjangoValidationError, ValueError):
            raise LotNotFound(detail=f'Fuel lot {lot_id} not found.')

    @staticmethod
    def create_lot(
        *,
        unit_id,
        loaded_liters: int,
        load_date: date | None = None,
        load_time: datetime | None = None,
        load_type: str = FuelLot.LoadType.PURCHASE,
        actor=None,
    ) -> FuelLot:
        """
        Create a lot with the next sequence index for (unit, load_date).

        Raises UnknownUnit, then VolumeOutOfRange, before anything is
        reserved or written.
        """
        clock = get_clock()
        load_date = load_date or clock.today()

        unit = UnitRegistry.get_unit(unit_id)
        # Same instance validates the volume and provides the snapshot.
        if loaded_liters is None or loaded_liters <= 0 or loaded_liters > unit.capacity_liters:
            raise VolumeOutOfRange(
                detail=(
                    f'Loaded liters {loaded_liters} must be > 0 and <= capacity '
                    f'{unit.capacity_liters} of unit {unit.unit_code}.'
                ),
            )

        with locked_atomic(*_sequence_lock_key(unit.pk, load_date)):
            seq_index = LotSequencer.next_seq_index(unit.pk, load_date)
            lot = FuelLot(
                unit=unit,
                unit_code=unit.unit_code,
                unit_capacity_liters=unit.capacity_liters,
                load_date=load_date,
                load_time=load_time or clock.now(),
                seq_index=seq_index,
                seq_letters=seq_index_to_letters(seq_index),
                loaded_liters=loaded_liters,
                lot_code=gen_lot_code(unit.unit_code, load_date, seq_index, loaded_liters),
                load_type=load_type,
                used_liters=0,
                stock_status=FuelLot.StockStatus.INSTOCK,
                created_by=actor,
            )
            try:
                with transaction.atomic():
                    lot.save()
            except IntegrityError as exc:
                logger.error('Lot code %s rejected on insert: %s', lot.lot_code, exc)
                raise LotCodeConflict(detail=f'Lot code {lot.lot_code} is already in use.') from exc

            ActivityTrailService.emit(
                action=ACTIVITY_ACTION_CREATE,
                entity_type=ACTIVITY_ENTITY_LOT,
                entity_id=str(lot.pk),
                unit_id=str(unit.pk),
                op_date=load_date.isoformat(),
                amount_liters=loaded_liters,
                payload={
                    'lot_code': lot.lot_code,
                    'seq_index': seq_index,
                    'load_type': load_type,
                },
                actor_id=getattr(actor, 'pk', None),
            )

        logger.info(
            'FuelLot %s created: %s unit=%s seq=%d loaded=%d',
            lot.pk, lot.lot_code, unit.unit_code, seq_index, loaded_liters,
        )
        return lot

    @staticmethod
    def preview_lot_code(*, unit_id, loaded_liters: int, load_date: date | None = None) -> tuple[str, int]:
        """Code and index the next lot would get. Reserves nothing."""
        load_date = load_date or get_clock().today()
        unit = UnitRegistry.get_unit(unit_id)
        seq_index = LotSequencer.preview(unit.pk, load_date)
        return gen_lot_code(unit.unit_code, load_date, seq_index, loaded_liters), seq_index

    @staticmethod
    def lock_lots(lot_ids) -> dict:
        """
        Row-lock the given lots in ascending primary-key order and return
        them by pk. Must run inside a transaction.
        """
        ids = [lot_id for lot_id in lot_ids if lot_id is not None]
        try:
            lots = list(
                FuelLot.objects.select_for_update().filter(pk__in=ids).order_by('pk')
            )
        except (DjangoValidationError, ValueError):
            raise LotNotFound(detail=f'Fuel lot(s) {ids} not found.')
        return {lot.pk: lot for lot in lots}

    @staticmethod
    def _locked_lot(lot_id) -> FuelLot:
        locked = LotService.lock_lots([lot_id])
        if not locked:
            raise LotNotFound(detail=f'Fuel lot {lot_id} not found.')
        return next(iter(locked.values()))

    @staticmethod
    def debit_lot(lot_id, amount: int, *, testing: bool = False) -> FuelLot:
        """
        Add ``amount`` to the lot's used volume, flipping it to SOLD when
        fully drawn. Raises InsufficientBalance rather than clamping.
        """
        if amount is None or amount <= 0:
            raise VolumeOutOfRange(detail='Debit amount must be positive.')

        with locked_atomic(*lot_lock_key(lot_id)):
            return LotService._debit(lot_id, amount, testing)

    @staticmethod
    def _debit(lot_id, amount: int, testing: bool) -> FuelLot:
        lot = LotService._locked_lot(lot_id)
        if lot.used_liters + amount > lot.loaded_liters:
            raise InsufficientBalance(
                detail=(
                    f'Insufficient balance in {lot.lot_code}: '
                    f'remaining={lot.remaining_liters}, requested={amount}.'
                ),
            )

        updates = {
            'used_liters': F('used_liters') + amount,
            'stock_status': Case(
                When(loaded_liters=F('used_liters') + amount, then=Value(FuelLot.StockStatus.SOLD)),
                default=F('stock_status'),
                output_field=models.CharField(),
            ),
            'updated_at': timezone.now(),
        }
        if testing:
            updates['testing_liters'] = F('testing_liters') + amount

        # Re-validated at write time; 0 rows means another writer got there first.
        rows = FuelLot.objects.filter(
            pk=lot.pk, used_liters__lte=F('loaded_liters') - amount,
        ).update(**updates)
        if rows == 0:
            lot.refresh_from_db()
            raise InsufficientBalance(
                detail=(
                    f'Insufficient balance in {lot.lot_code}: '
                    f'remaining={lot.remaining_liters}, requested={amount}.'
                ),
            )

        lot.refresh_from_db()
        logger.info(
            'FuelLot %s debited %d L: used=%d/%d status=%s',
            lot.lot_code, amount, lot.used_liters, lot.loaded_liters, lot.stock_status,
        )
        return lot

    @staticmethod
    @transaction.atomic
    def credit_lot(lot_id, amount: int) -> FuelLot:
        """
        Top up an in-stock lot with ``amount`` liters arriving from another unit.

        Takes only the row lock: the receiving lot may be the source of a
        concurrent transfer that already holds its lot key.
        """
        if amount is None or amount <= 0:
            raise VolumeOutOfRange(detail='Credit amount must be positive.')

        lot = LotService._locked_lot(lot_id)
        if lot.is_sold:
            raise BusinessRuleViolation(detail=f'Cannot top up {lot.lot_code}: lot is SOLD.')
        if lot.remaining_liters + amount > lot.unit_capacity_liters:
            raise VolumeOutOfRange(
                detail=(
                    f'Topping up {lot.lot_code} by {amount} L would exceed capacity '
                    f'{lot.unit_capacity_liters} L (on hand {lot.remaining_liters} L).'
                ),
            )

        FuelLot.objects.filter(pk=lot.pk).update(
            loaded_liters=F('loaded_liters') + amount,
            updated_at=timezone.now(),
        )
        lot.refresh_from_db()
        logger.info(
            'FuelLot %s credited %d L: used=%d/%d',
            lot.lot_code, amount, lot.used_liters, lot.loaded_liters,
        )
        return lot

    @staticmethod
    def open_lot_for_unit(unit_id) -> FuelLot | None:
        """Most recent INSTOCK lot of the unit, or None if the unit is empty."""
        return (
            FuelLot.objects
            .filter(unit_id=unit_id, stock_status=FuelLot.StockStatus.INSTOCK)
            .order_by('-load_date', '-seq_index', '-created_at')
            .first()
        )

    @staticmethod
    def on_hand_liters(unit_id) -> int:
        result = FuelLot.objects.filter(
            unit_id=unit_id, stock_status=FuelLot.StockStatus.INSTOCK,
        ).aggregate(on_hand=Sum(F('loaded_liters') - F('used_liters')))
        return result['on_hand'] or 0
