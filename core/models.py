"""
Core — Base Models & Activity Trail

Provides reusable abstract models for timestamps and actor tracking,
plus the ActivityEvent model: the append-only trail of every lot
creation and transfer, consumed by reporting.

@file core/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


# ---------------------------------------------------------------------------
# Abstract base models (mixins)
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class AuditFieldsMixin(models.Model):
    """Adds created_by / updated_by foreign keys for actor tracking."""

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('updated by'),
    )

    class Meta:
        abstract = True


class BaseModel(TimestampMixin, AuditFieldsMixin):
    """
    Standard base for all FuelLedger models.
    UUID PK + timestamps + actor audit fields.
    """

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Activity trail — write-once record of every inventory event
# ---------------------------------------------------------------------------

class ActivityEvent(models.Model):
    """
    One row per lot creation or transfer. Written after the ledger
    transaction commits; never updated or deleted.
    """

    class ActionChoices(models.TextChoices):
        CREATE = 'CREATE', _('Create')

    class EntityChoices(models.TextChoices):
        LOT = 'lot', _('Lot')
        TRANSFER_INTERNAL = 'transfer_internal', _('Internal transfer')
        SALE = 'sale', _('Sale')
        TESTING = 'testing', _('Testing')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='fuel_activity',
        verbose_name=_('actor'),
    )
    action = models.CharField(
        _('action'), max_length=20,
        choices=ActionChoices.choices, db_index=True,
    )
    entity_type = models.CharField(
        _('entity type'), max_length=20,
        choices=EntityChoices.choices, db_index=True,
    )
    entity_id = models.CharField(_('entity ID'), max_length=40, db_index=True)
    unit_id = models.UUIDField(
        _('unit ID'), null=True, blank=True,
        help_text=_('Storage unit the event happened on; resolved in application layer'),
    )
    op_date = models.DateField(_('operational date'), null=True, blank=True)
    amount_liters = models.PositiveIntegerField(_('amount (L)'), null=True, blank=True)
    payload = models.JSONField(_('payload'), null=True, blank=True)

    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'fuel_ops_activity'
        verbose_name = _('activity event')
        verbose_name_plural = _('activity events')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='activity_entity_idx'),
            models.Index(fields=['unit_id', 'op_date'], name='activity_unit_date_idx'),
        ]

    def __str__(self):
        return f'{self.action} {self.entity_type}:{self.entity_id} ({self.amount_liters} L)'

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise NotImplementedError('ActivityEvent is append-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('ActivityEvent records cannot be deleted.')
