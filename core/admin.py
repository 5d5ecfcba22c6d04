"""
Core — Django Admin Configuration

Read-only admin for the activity trail.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import ActivityEvent


@admin.register(ActivityEvent)
class ActivityEventAdmin(admin.ModelAdmin):
    """Read-only activity trail viewer for administrators."""

    list_display = (
        'timestamp', 'entity_badge', 'entity_id', 'op_date',
        'amount_liters', 'actor',
    )
    list_filter = ('entity_type', 'action', 'op_date')
    search_fields = ('entity_id', 'actor__username')
    readonly_fields = (
        'id', 'actor', 'action', 'entity_type', 'entity_id', 'unit_id',
        'op_date', 'amount_liters', 'payload', 'timestamp',
    )
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    show_full_result_count = False
    list_per_page = 50
    ordering = ('-timestamp',)

    fieldsets = (
        (_('Event'), {
            'fields': ('id', 'action', 'timestamp', 'actor'),
        }),
        (_('Target'), {
            'fields': ('entity_type', 'entity_id', 'unit_id', 'op_date', 'amount_liters'),
        }),
        (_('Data'), {
            'fields': ('payload',),
            'classes': ('collapse',),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Entity'))
    def entity_badge(self, obj):
        colors = {
            'lot': '#22c55e',
            'transfer_internal': '#3b82f6',
            'sale': '#f97316',
            'testing': '#8b5cf6',
        }
        color = colors.get(obj.entity_type, '#6b7280')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.get_entity_type_display(),
        )
