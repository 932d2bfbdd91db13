from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('flats/<uuid:flat_id>/dashboard/', views.flat_dashboard, name='flat-dashboard'),
]
