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
            name='ActivityEvent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=[('CREATE', 'Create')], db_index=True, max_length=20, verbose_name='action')),
                ('entity_type', models.CharField(
                    choices=[
                        ('lot', 'Lot'),
                        ('transfer_internal', 'Internal transfer'),
                        ('sale', 'Sale'),
                        ('testing', 'Testing'),
                    ],
                    db_index=True, max_length=20, verbose_name='entity type',
                )),
                ('entity_id', models.CharField(db_index=True, max_length=40, verbose_name='entity ID')),
                ('unit_id', models.UUIDField(
                    blank=True, null=True, verbose_name='unit ID',
                    help_text='Storage unit the event happened on; resolved in application layer',
                )),
                ('op_date', models.DateField(blank=True, null=True, verbose_name='operational date')),
                ('amount_liters', models.PositiveIntegerField(blank=True, null=True, verbose_name='amount (L)')),
                ('payload', models.JSONField(blank=True, null=True, verbose_name='payload')),
                ('timestamp', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='timestamp')),
                ('actor', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='fuel_activity', to=settings.AUTH_USER_MODEL, verbose_name='actor',
                )),
            ],
            options={
                'verbose_name': 'activity event',
                'verbose_name_plural': 'activity events',
                'db_table': 'fuel_ops_activity',
                'ordering': ['-timestamp'],
                'indexes': [
                    models.Index(fields=['entity_type', 'entity_id'], name='activity_entity_idx'),
                    models.Index(fields=['unit_id', 'op_date'], name='activity_unit_date_idx'),
                ],
            },
        ),
    ]
