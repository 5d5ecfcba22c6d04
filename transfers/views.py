"""
Transfers — Views

POST transfers/ runs the Transfer Engine; the three record tables are
exposed read-only for reporting.

@file transfers/views.py
"""

from rest_framework import generics, status, viewsets
from rest_framework.response import Response

from .models import FuelInternalTransfer, FuelSaleTransfer, TestingSelfTransfer
from .serializers import (
    InternalTransferReadSerializer,
    SaleTransferReadSerializer,
    TestingDrawReadSerializer,
    TransferCreateSerializer,
    serialize_record,
)
from .services import TransferService


class TransferCreateView(generics.GenericAPIView):
    """Create one transfer of any kind. Response body is the created record."""

    serializer_class = TransferCreateSerializer
    filter_backends = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = TransferService.transfer(performed_by=request.user, **serializer.validated_data)
        return Response(
            serialize_record(record, context={'request': request}),
            status=status.HTTP_201_CREATED,
        )


class InternalTransferViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = InternalTransferReadSerializer
    filterset_fields = ['activity', 'from_unit', 'to_unit', 'from_lot', 'to_lot', 'transfer_date']
    search_fields = ['from_unit_code', 'to_unit_code', 'driver_name']
    ordering_fields = ['performed_at', 'transfer_date', 'volume_liters']
    ordering = ['-performed_at']

    def get_queryset(self):
        return FuelInternalTransfer.objects.select_related('from_lot', 'to_lot', 'performed_by')


class SaleTransferViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = SaleTransferReadSerializer
    filterset_fields = ['activity', 'from_unit', 'from_lot', 'sale_date', 'to_vehicle']
    search_fields = ['from_unit_code', 'to_vehicle', 'driver_name']
    ordering_fields = ['performed_at', 'sale_date', 'volume_liters']
    ordering = ['-performed_at']

    def get_queryset(self):
        return FuelSaleTransfer.objects.select_related('from_lot', 'performed_by')


class TestingDrawViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = TestingDrawReadSerializer
    filterset_fields = ['from_unit', 'from_lot', 'test_date']
    ordering_fields = ['performed_at', 'test_date', 'volume_liters']
    ordering = ['-performed_at']

    def get_queryset(self):
        return TestingSelfTransfer.objects.select_related('from_lot', 'performed_by')
