from rest_framework import viewsets, mixins, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Task
from .serializers import (
    TaskSerializer,
    TaskCreateSerializer,
    TaskUpdateSerializer,
    TaskFilterSerializer,
)
from apps.flats.permissions import IsFlatMember
from apps.tasks.services import (
    create_task,
    update_task,
    delete_task,
    list_flat_tasks,
    # Exceptions
    FlatNotFoundError,
    NotFlatMemberError,
    InvalidTaskError,
)


class FlatTaskViewSet(viewsets.GenericViewSet):
    """
    Tasks of one flat, nested under /api/flats/{flat_id}/tasks/.

    list: Tasks, newest first (filter: status)
    create: Add a task
    """

    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated, IsFlatMember]

    @extend_schema(parameters=[TaskFilterSerializer], responses={200: TaskSerializer(many=True)})
    def list(self, request, flat_id=None):
        filter_serializer = TaskFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        try:
            tasks = list_flat_tasks(
                flat_id=flat_id,
                user=request.user,
                status=filter_serializer.validated_data.get('status'),
            )
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(TaskSerializer(tasks, many=True).data)

    @extend_schema(request=TaskCreateSerializer, responses={201: TaskSerializer})
    def create(self, request, flat_id=None):
        serializer = TaskCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            task = create_task(
                flat_id=flat_id,
                created_by=request.user,
                title=data['title'],
                description=data['description'],
                assigned_to_id=data['assigned_to'],
                status=data['status'],
                image_url=data['image_url'],
            )
        except FlatNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidTaskError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TaskSerializer(task).data, status=status.HTTP_201_CREATED)


class TaskViewSet(
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """Single task at /api/tasks/{id}/; any flat member may change it."""

    queryset = Task.objects.select_related('flat', 'created_by', 'assigned_to')
    serializer_class = TaskSerializer
    permission_classes = [IsAuthenticated, IsFlatMember]
    lookup_value_regex = r'[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}'

    @extend_schema(request=TaskUpdateSerializer, responses={200: TaskSerializer})
    def update(self, request, *args, **kwargs):
        task = self.get_object()
        serializer = TaskUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        changes = dict(serializer.validated_data)
        if 'assigned_to' in changes:
            changes['assigned_to_id'] = changes.pop('assigned_to')

        try:
            task = update_task(task_id=task.id, user=request.user, **changes)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidTaskError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        task = self.get_queryset().get(id=task.id)
        return Response(TaskSerializer(task).data)

    def destroy(self, request, *args, **kwargs):
        task = self.get_object()

        try:
            delete_task(task_id=task.id, user=request.user)
        except NotFlatMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(status=status.HTTP_204_NO_CONTENT)
