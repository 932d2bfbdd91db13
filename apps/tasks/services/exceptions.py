"""
Domain-specific exceptions for tasks app.
"""


class TasksServiceError(Exception):
    """Base exception for all tasks service errors."""
    pass


class FlatNotFoundError(TasksServiceError):
    pass


class TaskNotFoundError(TasksServiceError):
    pass


class NotFlatMemberError(TasksServiceError):
    pass


class InvalidTaskError(TasksServiceError):
    """Raised for blank titles or assignees outside the flat."""
    pass
