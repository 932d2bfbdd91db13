from rest_framework import serializers
from .models import Task, TaskStatus
from apps.accounts.serializers import UserMinimalSerializer


class TaskFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)


class TaskSerializer(serializers.ModelSerializer):
    created_by = UserMinimalSerializer(read_only=True)
    assigned_to = UserMinimalSerializer(read_only=True)

    class Meta:
        model = Task
        fields = [
            'id',
            'flat',
            'title',
            'description',
            'status',
            'assigned_to',
            'created_by',
            'image_url',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class TaskCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    assigned_to = serializers.UUIDField(required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=TaskStatus.choices, default=TaskStatus.PENDING)
    image_url = serializers.URLField(required=False, allow_blank=True, default='', max_length=500)


class TaskUpdateSerializer(serializers.Serializer):
    """Every field optional; assigned_to=null unassigns."""

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    assigned_to = serializers.UUIDField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=TaskStatus.choices, required=False)
    image_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
