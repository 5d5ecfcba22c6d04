"""
Lots — Models

A FuelLot is a dated batch of fuel loaded into one storage unit and
tracked as a depleting balance. The owning unit's code and capacity are
copied onto the lot at creation so historical lots stay meaningful after
the unit is edited.

LotSequence is the explicit per-(unit, load_date) counter that hands
out sequence indexes.

@file lots/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class FuelLot(BaseModel):
    """
    Invariants (enforced by CHECK constraints):
      0 <= used_liters <= loaded_liters
      stock_status == SOLD  <=>  used_liters == loaded_liters
    """

    class StockStatus(models.TextChoices):
        INSTOCK = 'INSTOCK', _('In stock')
        SOLD = 'SOLD', _('Sold')

    class LoadType(models.TextChoices):
        PURCHASE = 'PURCHASE', _('Purchase')
        EMPTY_TRANSFER = 'EMPTY_TRANSFER', _('Transfer into empty unit')

    unit = models.ForeignKey(
        'units.StorageUnit',
        on_delete=models.PROTECT,
        related_name='lots',
        verbose_name=_('storage unit'),
    )
    # Snapshot at creation
    unit_code = models.CharField(_('unit code'), max_length=12)
    unit_capacity_liters = models.PositiveIntegerField(_('unit capacity (L)'))

    load_date = models.DateField(_('load date'), db_index=True)
    load_time = models.DateTimeField(
        _('load time'), null=True, blank=True,
        help_text=_('Physical purchase / arrival time, not the row creation time'),
    )
    seq_index = models.PositiveIntegerField(_('sequence index'))
    seq_letters = models.CharField(_('sequence letters'), max_length=8)
    loaded_liters = models.PositiveIntegerField(_('loaded (L)'))
    lot_code = models.CharField(_('lot code'), max_length=64, unique=True)
    load_type = models.CharField(
        _('load type'), max_length=16,
        choices=LoadType.choices,
        default=LoadType.PURCHASE,
    )

    used_liters = models.PositiveIntegerField(_('used (L)'), default=0)
    testing_liters = models.PositiveIntegerField(
        _('testing (L)'), default=0,
        help_text=_('Portion of used_liters drawn for quality testing'),
    )
    stock_status = models.CharField(
        _('stock status'), max_length=8,
        choices=StockStatus.choices,
        default=StockStatus.INSTOCK,
        db_index=True,
    )

    class Meta:
        db_table = 'fuel_lots'
        verbose_name = _('fuel lot')
        verbose_name_plural = _('fuel lots')
        ordering = ['-load_date', '-seq_index']
        indexes = [
            models.Index(fields=['unit', 'stock_status'], name='lot_unit_stock_idx'),
            models.Index(fields=['unit', 'load_date'], name='lot_unit_date_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['unit', 'load_date', 'seq_index'],
                name='unique_lot_per_unit_day_seq',
            ),
            models.CheckConstraint(
                condition=models.Q(seq_index__gt=0),
                name='lot_positive_seq_index',
            ),
            models.CheckConstraint(
                condition=models.Q(loaded_liters__gt=0),
                name='lot_positive_loaded',
            ),
            models.CheckConstraint(
                condition=models.Q(used_liters__lte=models.F('loaded_liters')),
                name='lot_used_within_loaded',
            ),
            models.CheckConstraint(
                condition=models.Q(testing_liters__lte=models.F('used_liters')),
                name='lot_testing_within_used',
            ),
            models.CheckConstraint(
                condition=(
                    models.Q(stock_status='SOLD', used_liters=models.F('loaded_liters'))
                    | models.Q(stock_status='INSTOCK', used_liters__lt=models.F('loaded_liters'))
                ),
                name='lot_sold_iff_depleted',
            ),
        ]

    def __str__(self):
        return f'{self.lot_code} ({self.used_liters}/{self.loaded_liters} L)'

    @property
    def remaining_liters(self) -> int:
        return self.loaded_liters - self.used_liters

    @property
    def is_sold(self) -> bool:
        return self.stock_status == self.StockStatus.SOLD

    def save(self, *args, **kwargs):
        # created_at is stamped once on insert and never rewritten.
        if not self._state.adding:
            update_fields = kwargs.get('update_fields')
            if update_fields is None:
                update_fields = [
                    f.name for f in self._meta.concrete_fields
                    if not f.primary_key and f.name != 'created_at'
                ]
            kwargs['update_fields'] = [f for f in update_fields if f != 'created_at']
        super().save(*args, **kwargs)


class LotSequence(models.Model):
    """Last sequence index handed out for one (unit, load_date) pair."""

    unit = models.ForeignKey(
        'units.StorageUnit',
        on_delete=models.PROTECT,
        related_name='lot_sequences',
        verbose_name=_('storage unit'),
    )
    load_date = models.DateField(_('load date'))
    last_index = models.PositiveIntegerField(_('last index'), default=0)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        db_table = 'fuel_lot_sequences'
        verbose_name = _('lot sequence')
        verbose_name_plural = _('lot sequences')
        constraints = [
            models.UniqueConstraint(
                fields=['unit', 'load_date'],
                name='unique_sequence_per_unit_day',
            ),
        ]

    def __str__(self):
        return f'{self.unit_id} {self.load_date}: {self.last_index}'
