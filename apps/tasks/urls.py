from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'tasks'

router = SimpleRouter()
router.register(r'tasks', views.TaskViewSet, basename='task')

flat_tasks = views.FlatTaskViewSet.as_view({'get': 'list', 'post': 'create'})

urlpatterns = [
    # GET    /api/flats/{flat_id}/tasks/   - List flat tasks (?status=)
    # POST   /api/flats/{flat_id}/tasks/   - Create task
    path('flats/<uuid:flat_id>/tasks/', flat_tasks, name='flat-tasks'),

    # GET/PUT/PATCH/DELETE /api/tasks/{id}/
    path('', include(router.urls)),
]
