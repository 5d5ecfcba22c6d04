import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('units', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FuelLot',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('unit_code', models.CharField(max_length=12, verbose_name='unit code')),
                ('unit_capacity_liters', models.PositiveIntegerField(verbose_name='unit capacity (L)')),
                ('load_date', models.DateField(db_index=True, verbose_name='load date')),
                ('load_time', models.DateTimeField(
                    blank=True, null=True, verbose_name='load time',
                    help_text='Physical purchase / arrival time, not the row creation time',
                )),
                ('seq_index', models.PositiveIntegerField(verbose_name='sequence index')),
                ('seq_letters', models.CharField(max_length=8, verbose_name='sequence letters')),
                ('loaded_liters', models.PositiveIntegerField(verbose_name='loaded (L)')),
                ('lot_code', models.CharField(max_length=64, unique=True, verbose_name='lot code')),
                ('load_type', models.CharField(
                    choices=[('PURCHASE', 'Purchase'), ('EMPTY_TRANSFER', 'Transfer into empty unit')],
                    default='PURCHASE', max_length=16, verbose_name='load type',
                )),
                ('used_liters', models.PositiveIntegerField(default=0, verbose_name='used (L)')),
                ('testing_liters', models.PositiveIntegerField(
                    default=0, verbose_name='testing (L)',
                    help_text='Portion of used_liters drawn for quality testing',
                )),
                ('stock_status', models.CharField(
                    choices=[('INSTOCK', 'In stock'), ('SOLD', 'Sold')],
                    db_index=True, default='INSTOCK', max_length=8, verbose_name='stock status',
                )),
                ('created_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by',
                )),
                ('updated_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by',
                )),
                ('unit', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='lots',
                    to='units.storageunit', verbose_name='storage unit',
                )),
            ],
            options={
                'verbose_name': 'fuel lot',
                'verbose_name_plural': 'fuel lots',
                'db_table': 'fuel_lots',
                'ordering': ['-load_date', '-seq_index'],
                'indexes': [
                    models.Index(fields=['unit', 'stock_status'], name='lot_unit_stock_idx'),
                    models.Index(fields=['unit', 'load_date'], name='lot_unit_date_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('unit', 'load_date', 'seq_index'), name='unique_lot_per_unit_day_seq'),
                    models.CheckConstraint(condition=models.Q(seq_index__gt=0), name='lot_positive_seq_index'),
                    models.CheckConstraint(condition=models.Q(loaded_liters__gt=0), name='lot_positive_loaded'),
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
                ],
            },
        ),
        migrations.CreateModel(
            name='LotSequence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('load_date', models.DateField(verbose_name='load date')),
                ('last_index', models.PositiveIntegerField(default=0, verbose_name='last index')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('unit', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='lot_sequences',
                    to='units.storageunit', verbose_name='storage unit',
                )),
            ],
            options={
                'verbose_name': 'lot sequence',
                'verbose_name_plural': 'lot sequences',
                'db_table': 'fuel_lot_sequences',
                'constraints': [
                    models.UniqueConstraint(fields=('unit', 'load_date'), name='unique_sequence_per_unit_day'),
                ],
            },
        ),
    ]
