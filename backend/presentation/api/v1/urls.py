"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.bom import PartViewSet

# Create router
router = DefaultRouter()

# BOM
router.register(r'bom', PartViewSet, basename='bom')

app_name = 'api_v1'

urlpatterns = [
    path('', include(router.urls)),
]
