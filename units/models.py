"""
Units — Models

The fixed registry of storage units (tankers, fixed tanks, dispensers)
that fuel lots are loaded into. Every other component treats a unit's
code and capacity as authoritative.

@file units/models.py
"""

import re

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel

# Ends in a digit so the sequence letters that follow it in a lot code
# can never be read as part of the unit code.
UNIT_CODE_REGEX = re.compile(r'^[A-Z0-9]{0,11}[0-9]$')

# Frozen once any lot references the unit.
IDENTITY_FIELDS = ('unit_type', 'unit_code', 'capacity_liters')


class StorageUnit(BaseModel):
    """
    A tanker, fixed tank or dispenser capable of holding fuel.

    unit_code is the short code embedded in lot codes (e.g. '4T1' for
    4-ton tanker #1).
    """

    class UnitType(models.TextChoices):
        TANKER = 'TANKER', _('Tanker')
        FIXED_TANK = 'FIXED_TANK', _('Fixed tank')
        DISPENSER = 'DISPENSER', _('Dispenser')

    unit_type = models.CharField(
        _('unit type'), max_length=12,
        choices=UnitType.choices, db_index=True,
    )
    unit_code = models.CharField(
        _('unit code'), max_length=12, unique=True,
        help_text=_('Short code used in lot codes (e.g. 4T1)'),
    )
    capacity_liters = models.PositiveIntegerField(_('capacity (L)'))
    active = models.BooleanField(_('active'), default=True, db_index=True)
    vehicle_number = models.CharField(
        _('vehicle number'), max_length=32, null=True, blank=True,
        help_text=_('Registration plate for tankers'),
    )

    class Meta:
        db_table = 'storage_units'
        verbose_name = _('storage unit')
        verbose_name_plural = _('storage units')
        ordering = ['unit_code']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity_liters__gt=0),
                name='unit_positive_capacity',
            ),
            models.UniqueConstraint(
                fields=['vehicle_number'],
                condition=models.Q(vehicle_number__isnull=False),
                name='unique_unit_vehicle_number',
            ),
        ]

    def __str__(self):
        return f'{self.unit_code} ({self.get_unit_type_display()}, {self.capacity_liters} L)'

    @property
    def is_referenced(self) -> bool:
        return not self._state.adding and self.lots.exists()

    def _check_unit_code(self):
        if not UNIT_CODE_REGEX.match(self.unit_code or ''):
            raise ValidationError({
                'unit_code': _('Unit code must be 1-12 upper-case letters or digits, ending in a digit.'),
            })

    def clean(self):
        super().clean()
        if self.unit_code:
            self._check_unit_code()
        if self.is_referenced:
            stored = StorageUnit.objects.filter(pk=self.pk).values(*IDENTITY_FIELDS).first()
            changed = [f for f in IDENTITY_FIELDS if stored and stored[f] != getattr(self, f)]
            if changed:
                raise ValidationError({
                    f: _('Cannot change once lots reference this unit.') for f in changed
                })

    def save(self, *args, **kwargs):
        # Admin goes through clean(); this covers direct ORM writes.
        self._check_unit_code()
        if self.is_referenced:
            self.clean()
        super().save(*args, **kwargs)
