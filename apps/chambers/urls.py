# apps/chambers/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ChamberViewSet

router = DefaultRouter()
router.register(r'chambers', ChamberViewSet, basename='chamber')

urlpatterns = [
    path('', include(router.urls)),
]

app_name = 'chambers'
