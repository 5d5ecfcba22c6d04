"""
Units — Service Layer

Unit Registry lookups. Callers that validate a volume against a unit's
capacity and then snapshot that capacity onto a lot must use the same
StorageUnit instance for both, so the two can never disagree.

@file units/services.py
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import QuerySet

from core.exceptions import UnknownUnit

from .models import StorageUnit

logger = logging.getLogger('fuelledger')


class UnitRegistry:
    """Read access to storage units."""

    @staticmethod
    def get_unit(unit_id, *, for_update: bool = False) -> StorageUnit:
        qs = StorageUnit.objects.all()
        if for_update:
            qs = qs.select_for_update()
        try:
            return qs.get(pk=unit_id)
        except (StorageUnit.DoesNotExist, DjangoValidationError, ValueError):
            raise UnknownUnit(detail=f'Unknown storage unit id {unit_id}.')

    @staticmethod
    def get_by_code(unit_code: str) -> StorageUnit:
        try:
            return StorageUnit.objects.get(unit_code=unit_code)
        except StorageUnit.DoesNotExist:
            raise UnknownUnit(detail=f'Unknown storage unit code {unit_code}.')

    @staticmethod
    def list_active(unit_type: str | None = None) -> QuerySet[StorageUnit]:
        qs = StorageUnit.objects.filter(active=True)
        if unit_type:
            qs = qs.filter(unit_type=unit_type)
        return qs.order_by('unit_code')
