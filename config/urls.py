"""
FuelLedger — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'FuelLedger Administration'
admin.site.site_title = 'FuelLedger'
admin.site.index_title = 'Fuel Lot Inventory Ledger'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """FuelLedger API v1 — endpoint directory."""
    return Response({
        'units': reverse('api-v1:units:unit-list', request=request, format=format),
        'lots': {
            'list': reverse('api-v1:lots:lot-list', request=request, format=format),
            'preview': reverse('api-v1:lots:lot-preview', request=request, format=format),
        },
        'transfers': {
            'create': reverse('api-v1:transfers:transfer-create', request=request, format=format),
            'internal': reverse('api-v1:transfers:internal-list', request=request, format=format),
            'sales': reverse('api-v1:transfers:sale-list', request=request, format=format),
            'testing': reverse('api-v1:transfers:testing-list', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('units/', include('units.urls', namespace='units')),
    path('lots/', include('lots.urls', namespace='lots')),
    path('transfers/', include('transfers.urls', namespace='transfers')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
