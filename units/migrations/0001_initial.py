import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StorageUnit',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('unit_type', models.CharField(
                    choices=[('TANKER', 'Tanker'), ('FIXED_TANK', 'Fixed tank'), ('DISPENSER', 'Dispenser')],
                    db_index=True, max_length=12, verbose_name='unit type',
                )),
                ('unit_code', models.CharField(
                    help_text='Short code used in lot codes (e.g. 4T1)',
                    max_length=12, unique=True, verbose_name='unit code',
                )),
                ('capacity_liters', models.PositiveIntegerField(verbose_name='capacity (L)')),
                ('active', models.BooleanField(db_index=True, default=True, verbose_name='active')),
                ('vehicle_number', models.CharField(
                    blank=True, help_text='Registration plate for tankers',
                    max_length=32, null=True, verbose_name='vehicle number',
                )),
                ('created_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by',
                )),
                ('updated_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by',
                )),
            ],
            options={
                'verbose_name': 'storage unit',
                'verbose_name_plural': 'storage units',
                'db_table': 'storage_units',
                'ordering': ['unit_code'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(capacity_liters__gt=0), name='unit_positive_capacity'),
                    models.UniqueConstraint(
                        condition=models.Q(vehicle_number__isnull=False),
                        fields=('vehicle_number',),
                        name='unique_unit_vehicle_number',
                    ),
                ],
            },
        ),
    ]
