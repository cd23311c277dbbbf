from django.urls import path, include
from rest_framework import routers
from rest_framework_nested import routers as nested_routers

from billing.views import SessionBillViewSet
from orders.views import SessionOrderViewSet
from .views import DiningSessionViewSet

router = routers.DefaultRouter()
router.register(r"dining-sessions", DiningSessionViewSet, basename="dining-session")

sessions_router = nested_routers.NestedSimpleRouter(router, r"dining-sessions", lookup="session")
sessions_router.register(r"orders", SessionOrderViewSet, basename="session-order")
sessions_router.register(r"bill", SessionBillViewSet, basename="session-bill")

urlpatterns = [
    # Include the nested router URLs first for precedence.
    path("", include(sessions_router.urls)),
    path("", include(router.urls)),
]
