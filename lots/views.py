"""
Lots — Views

Lots are listed and read freely; creation goes through LotService so
the sequence index and lot code are always allocated server-side.

@file lots/views.py
"""

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import FuelLot
from .serializers import (
    FuelLotCreateSerializer,
    FuelLotReadSerializer,
    LotCodePreviewSerializer,
)
from .services import LotService


class FuelLotViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    List/retrieve: authenticated.
    Create: POST {unit, loaded_liters, load_date?, load_time?}.
    Preview: GET preview/?unit=&loaded_liters=&load_date= (reserves nothing).
    """

    filterset_fields = ['unit', 'load_date', 'stock_status', 'load_type']
    search_fields = ['lot_code', 'unit_code']
    ordering_fields = ['load_date', 'seq_index', 'loaded_liters', 'created_at']
    ordering = ['-load_date', '-seq_index']

    def get_queryset(self):
        return FuelLot.objects.select_related('unit')

    def get_serializer_class(self):
        if self.action == 'create':
            return FuelLotCreateSerializer
        if self.action == 'preview':
            return LotCodePreviewSerializer
        return FuelLotReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lot = LotService.create_lot(actor=request.user, **serializer.validated_data)
        read_serializer = FuelLotReadSerializer(lot, context={'request': request})
        return Response(read_serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='preview', url_name='preview')
    def preview(self, request):
        ser = LotCodePreviewSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        lot_code, seq_index = LotService.preview_lot_code(**ser.validated_data)
        return Response({'lot_code': lot_code, 'seq_index': seq_index})
