"""
Units — Django Admin Configuration

Operators create and retire storage units here. Identity fields become
read-only once a lot references the unit.

@file units/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import IDENTITY_FIELDS, StorageUnit


@admin.register(StorageUnit)
class StorageUnitAdmin(admin.ModelAdmin):
    list_display = (
        'unit_code', 'unit_type', 'capacity_liters', 'vehicle_number',
        'active', 'created_at',
    )
    list_filter = ('unit_type', 'active')
    search_fields = ('unit_code', 'vehicle_number')
    ordering = ('unit_code',)

    fieldsets = (
        (_('Unit'), {
            'fields': ('unit_code', 'unit_type', 'capacity_liters'),
        }),
        (_('Status'), {
            'fields': ('active', 'vehicle_number'),
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        if obj is not None and obj.is_referenced:
            return IDENTITY_FIELDS
        return ()

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_referenced:
            return False
        return super().has_delete_permission(request, obj)

    def save_model(self, request, obj, form, change):
        if change:
            obj.updated_by = request.user
        else:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
