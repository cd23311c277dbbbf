"""
URL configuration for core_backend project.

Every app mounts its routers under /api/.
"""

from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import enums_view, health_check

urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("api/enums/", enums_view, name="enums"),
    path("admin/", admin.site.urls),
    path("api/auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("api/users/", include("users.urls")),
    path("api/", include("customers.urls")),
    path("api/", include("menu.urls")),
    path("api/", include("tables.urls")),
    path("api/", include("reservations.urls")),
    path("api/", include("dining.urls")),
    path("api/", include("orders.urls")),
    path("api/", include("billing.urls")),
]
