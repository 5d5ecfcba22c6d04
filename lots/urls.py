"""
Lots — URL Configuration

@file lots/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import FuelLotViewSet

app_name = 'lots'

router = DefaultRouter()
router.register('', FuelLotViewSet, basename='lot')

urlpatterns = [
    path('', include(router.urls)),
]
