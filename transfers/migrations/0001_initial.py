import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

ACTIVITY_CHOICES = [
    ('TANKER_TO_TANKER', 'Tanker to tanker'),
    ('TANKER_TO_FIXED', 'Tanker to fixed tank'),
    ('TANKER_TO_VEHICLE', 'Tanker to vehicle'),
    ('FIXED_TO_VEHICLE', 'Fixed tank to vehicle'),
    ('TESTING', 'Testing'),
]


def transfer_record_fields(model_name):
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ('activity', models.CharField(choices=ACTIVITY_CHOICES, db_index=True, max_length=20, verbose_name='activity')),
        ('from_unit_code', models.CharField(max_length=12, verbose_name='from unit code')),
        ('from_lot_code_change', models.CharField(
            help_text='Source lot code with its used volume after the transfer',
            max_length=96, verbose_name='from lot code change',
        )),
        ('volume_liters', models.PositiveIntegerField(verbose_name='volume (L)')),
        ('driver_name', models.CharField(blank=True, max_length=120, verbose_name='driver name')),
        ('performed_at', models.DateTimeField(verbose_name='performed at')),
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
        ('from_unit', models.ForeignKey(
            on_delete=django.db.models.deletion.PROTECT,
            related_name=f'{model_name}_out',
            to='units.storageunit', verbose_name='from unit',
        )),
        ('from_lot', models.ForeignKey(
            on_delete=django.db.models.deletion.PROTECT,
            related_name=f'{model_name}_out',
            to='lots.fuellot', verbose_name='from lot',
        )),
        ('performed_by', models.ForeignKey(
            blank=True, null=True,
            on_delete=django.db.models.deletion.SET_NULL,
            related_name='+',
            to=settings.AUTH_USER_MODEL, verbose_name='performed by',
        )),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('units', '0001_initial'),
        ('lots', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FuelInternalTransfer',
            fields=transfer_record_fields('fuelinternaltransfer') + [
                ('transfer_date', models.DateField(db_index=True, verbose_name='transfer date')),
                ('to_unit_code', models.CharField(max_length=12, verbose_name='to unit code')),
                ('to_lot_code_change', models.CharField(max_length=96, verbose_name='to lot code change')),
                ('transfer_to_empty', models.BooleanField(
                    default=False, verbose_name='transfer to empty unit',
                    help_text='A new destination lot was created because the unit had no open lot',
                )),
                ('to_unit', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='internal_transfers_in',
                    to='units.storageunit', verbose_name='to unit',
                )),
                ('to_lot', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='internal_transfers_in',
                    to='lots.fuellot', verbose_name='to lot',
                )),
            ],
            options={
                'verbose_name': 'internal transfer',
                'verbose_name_plural': 'internal transfers',
                'db_table': 'fuel_internal_transfers',
                'ordering': ['-performed_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['from_lot', 'performed_at'], name='internal_from_lot_idx'),
                    models.Index(fields=['to_lot', 'performed_at'], name='internal_to_lot_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(activity__in=['TANKER_TO_TANKER', 'TANKER_TO_FIXED']),
                        name='internal_transfer_activity',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(volume_liters__gt=0),
                        name='internal_transfer_positive_volume',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='FuelSaleTransfer',
            fields=transfer_record_fields('fuelsaletransfer') + [
                ('sale_date', models.DateField(db_index=True, verbose_name='sale date')),
                ('to_vehicle', models.CharField(max_length=40, verbose_name='to vehicle')),
                ('trip', models.PositiveSmallIntegerField(blank=True, null=True, verbose_name='trip')),
            ],
            options={
                'verbose_name': 'sale transfer',
                'verbose_name_plural': 'sale transfers',
                'db_table': 'fuel_sale_transfers',
                'ordering': ['-performed_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['from_lot', 'performed_at'], name='sale_from_lot_idx'),
                    models.Index(fields=['to_vehicle', 'sale_date'], name='sale_vehicle_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(activity__in=['TANKER_TO_VEHICLE', 'FIXED_TO_VEHICLE']),
                        name='sale_transfer_activity',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(volume_liters__gt=0),
                        name='sale_transfer_positive_volume',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='TestingSelfTransfer',
            fields=transfer_record_fields('testingselftransfer') + [
                ('test_date', models.DateField(db_index=True, verbose_name='test date')),
                ('to_vehicle', models.CharField(blank=True, max_length=40, verbose_name='to vehicle')),
            ],
            options={
                'verbose_name': 'testing draw',
                'verbose_name_plural': 'testing draws',
                'db_table': 'testing_self_transfers',
                'ordering': ['-performed_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['from_lot', 'performed_at'], name='testing_from_lot_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(activity='TESTING'),
                        name='testing_transfer_activity',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(volume_liters__gt=0),
                        name='testing_transfer_positive_volume',
                    ),
                ],
            },
        ),
    ]
