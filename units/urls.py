"""
Units — URL Configuration

@file units/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import StorageUnitViewSet

app_name = 'units'

router = DefaultRouter()
router.register('', StorageUnitViewSet, basename='unit')

urlpatterns = [
    path('', include(router.urls)),
]
