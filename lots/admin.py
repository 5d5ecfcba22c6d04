"""
Lots — Django Admin Configuration

Read-only views of lots and sequence counters. Lots are created and
drawn down only through the service layer.

@file lots/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import FuelLot, LotSequence


@admin.register(FuelLot)
class FuelLotAdmin(admin.ModelAdmin):
    list_display = (
        'lot_code', 'unit_code', 'load_date', 'seq_index',
        'loaded_liters', 'used_liters', 'testing_liters',
        'stock_status', 'load_type', 'created_at',
    )
    list_filter = ('stock_status', 'load_type', 'load_date')
    search_fields = ('lot_code', 'unit_code')
    list_select_related = ('unit',)
    date_hierarchy = 'load_date'
    ordering = ('-load_date', '-seq_index')
    list_per_page = 50

    fieldsets = (
        (_('Lot'), {
            'fields': ('lot_code', 'unit', 'unit_code', 'unit_capacity_liters', 'load_type'),
        }),
        (_('Sequence'), {
            'fields': ('load_date', 'load_time', 'seq_index', 'seq_letters'),
        }),
        (_('Balance'), {
            'fields': ('loaded_liters', 'used_liters', 'testing_liters', 'stock_status'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at', 'updated_at'),
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LotSequence)
class LotSequenceAdmin(admin.ModelAdmin):
    list_display = ('unit', 'load_date', 'last_index', 'updated_at')
    list_filter = ('load_date',)
    list_select_related = ('unit',)
    ordering = ('-load_date',)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
