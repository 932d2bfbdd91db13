from django.urls import path
from . import views

app_name = 'balances'

urlpatterns = [
    # GET /api/flats/{flat_id}/balance/      - Totals + settlement plan
    # GET /api/flats/{flat_id}/balance/me/   - Per-user view
    path('flats/<uuid:flat_id>/balance/', views.flat_balance, name='flat-balance'),
    path('flats/<uuid:flat_id>/balance/me/', views.my_balance, name='my-balance'),
]
