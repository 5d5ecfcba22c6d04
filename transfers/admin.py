"""
Transfers — Django Admin Configuration

Read-only lists of transfer records. No add, edit or delete (insert-only).

@file transfers/admin.py
"""

from django.contrib import admin

from .models import FuelInternalTransfer, FuelSaleTransfer, TestingSelfTransfer


class TransferRecordAdmin(admin.ModelAdmin):
    list_select_related = ('from_lot', 'performed_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'performed_at'
    ordering = ('-performed_at',)

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False  # INSERT ONLY — no updates

    def has_delete_permission(self, request, obj=None):
        return False  # INSERT ONLY — no deletes


@admin.register(FuelInternalTransfer)
class FuelInternalTransferAdmin(TransferRecordAdmin):
    list_display = (
        'performed_at', 'activity', 'from_unit_code', 'to_unit_code',
        'volume_liters', 'from_lot_code_change', 'to_lot_code_change',
        'transfer_to_empty',
    )
    list_filter = ('activity', 'transfer_to_empty', 'transfer_date')
    search_fields = ('from_unit_code', 'to_unit_code', 'driver_name')


@admin.register(FuelSaleTransfer)
class FuelSaleTransferAdmin(TransferRecordAdmin):
    list_display = (
        'performed_at', 'activity', 'from_unit_code', 'to_vehicle', 'trip',
        'volume_liters', 'from_lot_code_change',
    )
    list_filter = ('activity', 'sale_date')
    search_fields = ('from_unit_code', 'to_vehicle', 'driver_name')


@admin.register(TestingSelfTransfer)
class TestingSelfTransferAdmin(TransferRecordAdmin):
    list_display = (
        'performed_at', 'from_unit_code', 'volume_liters',
        'from_lot_code_change', 'to_vehicle',
    )
    list_filter = ('test_date',)
    search_fields = ('from_unit_code',)
