"""
Transfers — URL Configuration

@file transfers/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import (
    InternalTransferViewSet,
    SaleTransferViewSet,
    TestingDrawViewSet,
    TransferCreateView,
)

app_name = 'transfers'

router = SimpleRouter()
router.register('internal', InternalTransferViewSet, basename='internal')
router.register('sales', SaleTransferViewSet, basename='sale')
router.register('testing', TestingDrawViewSet, basename='testing')

urlpatterns = [
    path('', TransferCreateView.as_view(), name='transfer-create'),
    path('', include(router.urls)),
]
