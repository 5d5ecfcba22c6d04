"""
Tests — seed_storage_units management command.

@file units/tests/test_commands.py
"""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from units.models import StorageUnit


pytestmark = pytest.mark.django_db


class TestSeedStorageUnits:

    def test_default_fleet_is_idempotent(self):
        call_command('seed_storage_units', stdout=StringIO())
        first = StorageUnit.objects.count()
        call_command('seed_storage_units', stdout=StringIO())

        assert first == 5
        assert StorageUnit.objects.count() == 5
        dt1 = StorageUnit.objects.get(unit_code='DT1')
        assert (dt1.unit_type, dt1.capacity_liters) == ('FIXED_TANK', 20000)

    def test_explicit_units(self):
        out = StringIO()
        call_command('seed_storage_units', '7t1:tanker:7000', stdout=out)
        unit = StorageUnit.objects.get(unit_code='7T1')
        assert (unit.unit_type, unit.capacity_liters) == ('TANKER', 7000)
        assert '1 new units created' in out.getvalue()

    @pytest.mark.parametrize('raw', ['4T1', '4T1:BARGE:100', '4T1:TANKER:0', '4T1:TANKER:lots', '4T1A:TANKER:5000'])
    def test_invalid_spec(self, raw):
        with pytest.raises(CommandError):
            call_command('seed_storage_units', raw, stdout=StringIO())
