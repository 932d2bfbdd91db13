from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'invitations'

router = DefaultRouter()
router.register(r'', views.InvitationViewSet, basename='invitation')

urlpatterns = [
    # GET  /api/invitations/?flat={id}         - Pending invitations (owner)
    # POST /api/invitations/                   - Invite an email (owner)
    # POST /api/invitations/{id}/revoke/       - Revoke (owner)
    # POST /api/invitations/accept/            - Accept by token
    path('', include(router.urls)),
]
