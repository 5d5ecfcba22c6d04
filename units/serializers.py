"""
Units — Serializers

@file units/serializers.py
"""

from rest_framework import serializers

from .models import StorageUnit


class StorageUnitReadSerializer(serializers.ModelSerializer):
    unit_type_display = serializers.CharField(source='get_unit_type_display', read_only=True)
    on_hand_liters = serializers.SerializerMethodField()

    class Meta:
        model = StorageUnit
        fields = [
            'id', 'unit_code', 'unit_type', 'unit_type_display',
            'capacity_liters', 'active', 'vehicle_number',
            'on_hand_liters',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_on_hand_liters(self, obj):
        from lots.services import LotService

        return LotService.on_hand_liters(obj.pk)
