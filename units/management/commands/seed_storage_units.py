"""
Units — Management Command: seed_storage_units

Populates the storage unit registry with a default depot fleet, or with
the units given on the command line as CODE:TYPE:CAPACITY.

Usage::

    python manage.py seed_storage_units
    python manage.py seed_storage_units 4T2:TANKER:5000 DT2:FIXED_TANK:20000

Idempotent: safe to re-run (uses get_or_create on unit_code).

@file units/management/commands/seed_storage_units.py
"""

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from units.models import UNIT_CODE_REGEX, StorageUnit


DEFAULT_UNITS = [
    {'unit_code': '4T1', 'unit_type': 'TANKER', 'capacity_liters': 5000},
    {'unit_code': '4T2', 'unit_type': 'TANKER', 'capacity_liters': 5000},
    {'unit_code': '10T1', 'unit_type': 'TANKER', 'capacity_liters': 12000},
    {'unit_code': 'DT1', 'unit_type': 'FIXED_TANK', 'capacity_liters': 20000},
    {'unit_code': 'DP1', 'unit_type': 'DISPENSER', 'capacity_liters': 1000},
]


def parse_unit_spec(raw: str) -> dict:
    try:
        code, unit_type, capacity = raw.split(':')
        capacity_liters = int(capacity)
    except ValueError:
        raise CommandError(f'Invalid unit "{raw}". Expected CODE:TYPE:CAPACITY.')
    unit_type = unit_type.upper()
    if unit_type not in StorageUnit.UnitType.values:
        raise CommandError(
            f'Invalid unit type "{unit_type}". Choose from {", ".join(StorageUnit.UnitType.values)}.'
        )
    code = code.upper()
    if not UNIT_CODE_REGEX.match(code):
        raise CommandError(f'Invalid unit code "{code}". Use 1-12 letters or digits ending in a digit.')
    if capacity_liters <= 0:
        raise CommandError(f'Capacity must be positive for unit "{code}".')
    return {'unit_code': code, 'unit_type': unit_type, 'capacity_liters': capacity_liters}


class Command(BaseCommand):
    help = 'Seed the storage unit registry (tankers, fixed tanks, dispensers).'

    def add_arguments(self, parser):
        parser.add_argument('units', nargs='*', help='CODE:TYPE:CAPACITY, e.g. 4T1:TANKER:5000')

    @transaction.atomic
    def handle(self, *args, **options):
        units = [parse_unit_spec(raw) for raw in options['units']] or DEFAULT_UNITS

        created_count = 0
        for unit_data in units:
            _, created = StorageUnit.objects.get_or_create(
                unit_code=unit_data['unit_code'],
                defaults={
                    'unit_type': unit_data['unit_type'],
                    'capacity_liters': unit_data['capacity_liters'],
                },
            )
            if created:
                created_count += 1
                self.stdout.write(f'  Created unit: {unit_data["unit_code"]}')
            else:
                self.stdout.write(f'  Exists: {unit_data["unit_code"]}')

        self.stdout.write(self.style.SUCCESS(
            f'Done. {created_count} new units created, {len(units) - created_count} already existed.'
        ))
