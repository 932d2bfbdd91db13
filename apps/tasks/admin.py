from django.contrib import admin
from apps.tasks.models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'flat', 'status', 'assigned_to', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['title', 'description', 'flat__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']
