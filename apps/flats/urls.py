from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'flats'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.FlatViewSet, basename='flat')

urlpatterns = [
    # GET    /api/flats/                             - List user's flats
    # POST   /api/flats/                             - Create flat
    # GET    /api/flats/{id}/                        - Flat detail (members)
    # PUT    /api/flats/{id}/                        - Update flat (owner)
    # PATCH  /api/flats/{id}/                        - Partial update (owner)
    # GET    /api/flats/{id}/members/                - List members
    # POST   /api/flats/{id}/add_member/             - Add member by email (owner)
    # DELETE /api/flats/{id}/members/{user_id}/      - Remove member (owner)
    # POST   /api/flats/{id}/leave/                  - Leave flat
    path('', include(router.urls)),
]
