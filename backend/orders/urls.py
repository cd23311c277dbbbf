from django.urls import path, include
from rest_framework import routers

from .views import OrderViewSet, OrderItemViewSet

app_name = "orders"

router = routers.DefaultRouter()
router.register(r"orders", OrderViewSet, basename="order")
router.register(r"order-items", OrderItemViewSet, basename="order-item")

# Session-scoped order routes are nested under dining-sessions in dining/urls.py.
urlpatterns = [
    path("", include(router.urls)),
]
