"""
Units — Views

Read-only registry endpoints. Units are created and retired by
operators through the Django admin.

@file units/views.py
"""

from rest_framework import viewsets

from .models import StorageUnit
from .serializers import StorageUnitReadSerializer


class StorageUnitViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = StorageUnitReadSerializer
    filterset_fields = ['unit_type', 'active']
    search_fields = ['unit_code', 'vehicle_number']
    ordering_fields = ['unit_code', 'capacity_liters', 'created_at']
    ordering = ['unit_code']

    def get_queryset(self):
        return StorageUnit.objects.all()
