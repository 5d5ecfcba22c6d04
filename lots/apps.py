"""
Lots — Application Configuration
"""

from django.apps import AppConfig


class LotsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'lots'
    verbose_name = 'Fuel Lot Ledger'
