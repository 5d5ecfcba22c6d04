"""
Transfers — Serializers

One read serializer per record type and a single input serializer for
POST transfers/. Kind-specific rules live in TransferService.

@file transfers/serializers.py
"""

from rest_framework import serializers

from .models import ActivityKind, FuelInternalTransfer, FuelSaleTransfer, TestingSelfTransfer

__all__ = [
    'TransferCreateSerializer',
    'InternalTransferReadSerializer',
    'SaleTransferReadSerializer',
    'TestingDrawReadSerializer',
    'serialize_record',
]

COMMON_FIELDS = [
    'id', 'activity', 'activity_display',
    'from_unit', 'from_unit_code', 'from_lot', 'from_lot_code_change',
    'volume_liters', 'driver_name',
    'performed_at', 'performed_by', 'created_at',
]


class TransferCreateSerializer(serializers.Serializer):
    kind = serializers.ChoiceField(choices=ActivityKind.choices)
    from_lot = serializers.UUIDField(source='from_lot_id')
    volume_liters = serializers.IntegerField(source='volume')
    to_unit = serializers.UUIDField(source='to_unit_id', required=False, allow_null=True, default=None)
    to_vehicle = serializers.CharField(max_length=40, required=False, allow_blank=True, default='')
    driver_name = serializers.CharField(max_length=120, required=False, allow_blank=True, default='')
    trip = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    op_date = serializers.DateField(required=False, allow_null=True, default=None)


class InternalTransferReadSerializer(serializers.ModelSerializer):
    activity_display = serializers.CharField(source='get_activity_display', read_only=True)

    class Meta:
        model = FuelInternalTransfer
        fields = COMMON_FIELDS + [
            'transfer_date', 'to_unit', 'to_unit_code', 'to_lot',
            'to_lot_code_change', 'transfer_to_empty',
        ]
        read_only_fields = fields


class SaleTransferReadSerializer(serializers.ModelSerializer):
    activity_display = serializers.CharField(source='get_activity_display', read_only=True)

    class Meta:
        model = FuelSaleTransfer
        fields = COMMON_FIELDS + ['sale_date', 'to_vehicle', 'trip']
        read_only_fields = fields


class TestingDrawReadSerializer(serializers.ModelSerializer):
    activity_display = serializers.CharField(source='get_activity_display', read_only=True)

    class Meta:
        model = TestingSelfTransfer
        fields = COMMON_FIELDS + ['test_date', 'to_vehicle']
        read_only_fields = fields


def serialize_record(record, context=None) -> dict:
    """Serialize whichever transfer record the engine returned."""
    if isinstance(record, FuelInternalTransfer):
        serializer_class = InternalTransferReadSerializer
    elif isinstance(record, FuelSaleTransfer):
        serializer_class = SaleTransferReadSerializer
    else:
        serializer_class = TestingDrawReadSerializer
    return serializer_class(record, context=context or {}).data
