"""
URL configuration for Roomie.

All endpoints live under /api/. Flat-scoped resources (expenses, tasks,
balance, dashboard) are nested under /api/flats/<flat_id>/ and included
from their own apps.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/flats/', include('apps.flats.urls')),
    path('api/', include('apps.expenses.urls')),
    path('api/', include('apps.tasks.urls')),
    path('api/', include('apps.balances.urls')),
    path('api/', include('apps.dashboard.urls')),
    path('api/invitations/', include('apps.invitations.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
