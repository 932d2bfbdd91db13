"""
Tasks app services layer.
"""

from .exceptions import (
    TasksServiceError,
    FlatNotFoundError,
    TaskNotFoundError,
    NotFlatMemberError,
    InvalidTaskError,
)

from .task_management import (
    create_task,
    update_task,
    delete_task,
    list_flat_tasks,
)


__all__ = [
    # Exceptions
    'TasksServiceError',
    'FlatNotFoundError',
    'TaskNotFoundError',
    'NotFlatMemberError',
    'InvalidTaskError',

    # Task Management
    'create_task',
    'update_task',
    'delete_task',
    'list_flat_tasks',
]
