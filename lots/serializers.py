"""
Lots — Serializers

Read serializer for FuelLot, plus input serializers for lot creation
and code preview. Volumes are whole liters.

@file lots/serializers.py
"""

from rest_framework import serializers

from .models import FuelLot

__all__ = [
    'FuelLotReadSerializer',
    'FuelLotCreateSerializer',
    'LotCodePreviewSerializer',
]


class FuelLotReadSerializer(serializers.ModelSerializer):
    stock_status_display = serializers.CharField(
        source='get_stock_status_display', read_only=True,
    )
    load_type_display = serializers.CharField(
        source='get_load_type_display', read_only=True,
    )
    remaining_liters = serializers.IntegerField(read_only=True)

    class Meta:
        model = FuelLot
        fields = [
            'id', 'lot_code', 'unit', 'unit_code', 'unit_capacity_liters',
            'load_date', 'load_time', 'seq_index', 'seq_letters',
            'loaded_liters', 'used_liters', 'testing_liters', 'remaining_liters',
            'load_type', 'load_type_display',
            'stock_status', 'stock_status_display',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class FuelLotCreateSerializer(serializers.Serializer):
    unit = serializers.UUIDField(source='unit_id')
    loaded_liters = serializers.IntegerField()
    load_date = serializers.DateField(required=False, default=None)
    load_time = serializers.DateTimeField(required=False, default=None)


class LotCodePreviewSerializer(serializers.Serializer):
    unit = serializers.UUIDField(source='unit_id')
    loaded_liters = serializers.IntegerField(min_value=1)
    load_date = serializers.DateField(required=False, default=None)
