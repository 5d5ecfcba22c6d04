"""
Transfers — Models

One record per movement of volume out of a lot. Internal transfers move
it to another unit's lot; sales send it to an external vehicle; testing
draws consume it for quality checks and are kept apart so they never
show up in sale or transfer reporting.

Records are INSERT ONLY — never update or delete.

@file transfers/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class ActivityKind(models.TextChoices):
    TANKER_TO_TANKER = 'TANKER_TO_TANKER', _('Tanker to tanker')
    TANKER_TO_FIXED = 'TANKER_TO_FIXED', _('Tanker to fixed tank')
    TANKER_TO_VEHICLE = 'TANKER_TO_VEHICLE', _('Tanker to vehicle')
    FIXED_TO_VEHICLE = 'FIXED_TO_VEHICLE', _('Fixed tank to vehicle')
    TESTING = 'TESTING', _('Testing')


INTERNAL_KINDS = (ActivityKind.TANKER_TO_TANKER, ActivityKind.TANKER_TO_FIXED)
SALE_KINDS = (ActivityKind.TANKER_TO_VEHICLE, ActivityKind.FIXED_TO_VEHICLE)


class TransferRecord(models.Model):
    """Fields shared by every transfer kind: the source side and who/when."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    activity = models.CharField(
        _('activity'), max_length=20,
        choices=ActivityKind.choices, db_index=True,
    )

    from_unit = models.ForeignKey(
        'units.StorageUnit',
        on_delete=models.PROTECT,
        related_name='%(class)s_out',
        verbose_name=_('from unit'),
    )
    from_unit_code = models.CharField(_('from unit code'), max_length=12)
    from_lot = models.ForeignKey(
        'lots.FuelLot',
        on_delete=models.PROTECT,
        related_name='%(class)s_out',
        verbose_name=_('from lot'),
    )
    from_lot_code_change = models.CharField(
        _('from lot code change'), max_length=96,
        help_text=_('Source lot code with its used volume after the transfer'),
    )

    volume_liters = models.PositiveIntegerField(_('volume (L)'))
    driver_name = models.CharField(_('driver name'), max_length=120, blank=True)

    performed_at = models.DateTimeField(_('performed at'))
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('performed by'),
    )
    created_at = models.DateTimeField(_('created at'), auto_now_add=True, db_index=True)
    # No updated_at — immutable record.

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise NotImplementedError(f'{type(self).__name__} is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError(f'{type(self).__name__} records cannot be deleted.')


class FuelInternalTransfer(TransferRecord):
    """Tanker to tanker, or tanker to fixed tank."""

    transfer_date = models.DateField(_('transfer date'), db_index=True)
    to_unit = models.ForeignKey(
        'units.StorageUnit',
        on_delete=models.PROTECT,
        related_name='internal_transfers_in',
        verbose_name=_('to unit'),
    )
    to_unit_code = models.CharField(_('to unit code'), max_length=12)
    to_lot = models.ForeignKey(
        'lots.FuelLot',
        on_delete=models.PROTECT,
        related_name='internal_transfers_in',
        verbose_name=_('to lot'),
    )
    to_lot_code_change = models.CharField(_('to lot code change'), max_length=96)
    transfer_to_empty = models.BooleanField(
        _('transfer to empty unit'), default=False,
        help_text=_('A new destination lot was created because the unit had no open lot'),
    )

    class Meta:
        db_table = 'fuel_internal_transfers'
        verbose_name = _('internal transfer')
        verbose_name_plural = _('internal transfers')
        ordering = ['-performed_at']
        indexes = [
            models.Index(fields=['from_lot', 'performed_at'], name='internal_from_lot_idx'),
            models.Index(fields=['to_lot', 'performed_at'], name='internal_to_lot_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(activity__in=[k.value for k in INTERNAL_KINDS]),
                name='internal_transfer_activity',
            ),
            models.CheckConstraint(
                condition=models.Q(volume_liters__gt=0),
                name='internal_transfer_positive_volume',
            ),
        ]

    def __str__(self):
        return f'{self.activity} {self.volume_liters} L {self.from_unit_code} -> {self.to_unit_code}'


class FuelSaleTransfer(TransferRecord):
    """Volume leaving the ledger into an external vehicle."""

    sale_date = models.DateField(_('sale date'), db_index=True)
    to_vehicle = models.CharField(_('to vehicle'), max_length=40)
    trip = models.PositiveSmallIntegerField(_('trip'), null=True, blank=True)

    class Meta:
        db_table = 'fuel_sale_transfers'
        verbose_name = _('sale transfer')
        verbose_name_plural = _('sale transfers')
        ordering = ['-performed_at']
        indexes = [
            models.Index(fields=['from_lot', 'performed_at'], name='sale_from_lot_idx'),
            models.Index(fields=['to_vehicle', 'sale_date'], name='sale_vehicle_date_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(activity__in=[k.value for k in SALE_KINDS]),
                name='sale_transfer_activity',
            ),
            models.CheckConstraint(
                condition=models.Q(volume_liters__gt=0),
                name='sale_transfer_positive_volume',
            ),
        ]

    def __str__(self):
        return f'{self.activity} {self.volume_liters} L {self.from_unit_code} -> {self.to_vehicle}'


class TestingSelfTransfer(TransferRecord):
    """Quality-testing draw; excluded from sale and transfer reporting."""

    test_date = models.DateField(_('test date'), db_index=True)
    to_vehicle = models.CharField(_('to vehicle'), max_length=40, blank=True)

    class Meta:
        db_table = 'testing_self_transfers'
        verbose_name = _('testing draw')
        verbose_name_plural = _('testing draws')
        ordering = ['-performed_at']
        indexes = [
            models.Index(fields=['from_lot', 'performed_at'], name='testing_from_lot_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(activity=ActivityKind.TESTING.value),
                name='testing_transfer_activity',
            ),
            models.CheckConstraint(
                condition=models.Q(volume_liters__gt=0),
                name='testing_transfer_positive_volume',
            ),
        ]

    def __str__(self):
        return f'TESTING {self.volume_liters} L from {self.from_unit_code}'
