"""
Task management service.

Any member of a flat may create, edit and delete its tasks.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.flats.models import Flat
from apps.tasks.models import Task, TaskStatus
from config.logging import get_logger

from .exceptions import (
    FlatNotFoundError,
    TaskNotFoundError,
    NotFlatMemberError,
    InvalidTaskError,
)

logger = get_logger(__name__)

_UNSET = object()


def _get_member_flat(*, flat_id: UUID, user: User) -> Flat:
    try:
        flat = Flat.objects.get(id=flat_id)
    except Flat.DoesNotExist:
        raise FlatNotFoundError("Flat not found")

    if not flat.has_member(user):
        raise NotFlatMemberError("Not allowed")
    return flat


def _check_assignee(flat: Flat, assigned_to_id: Optional[UUID]) -> None:
    if assigned_to_id is None:
        return
    if not flat.memberships.filter(user_id=assigned_to_id).exists():
        raise InvalidTaskError("assigned_to must be a flat member")


@transaction.atomic
def create_task(
    *,
    flat_id: UUID,
    created_by: User,
    title: str,
    description: str = '',
    assigned_to_id: Optional[UUID] = None,
    status: str = TaskStatus.PENDING,
    image_url: str = '',
) -> Task:
    """
    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotFlatMemberError: If created_by is not a member
        InvalidTaskError: If title is blank or assignee is not a member
    """
    flat = _get_member_flat(flat_id=flat_id, user=created_by)

    if not (title or '').strip():
        raise InvalidTaskError("Title is required")
    _check_assignee(flat, assigned_to_id)

    task = Task.objects.create(
        flat=flat,
        created_by=created_by,
        title=title.strip(),
        description=(description or '').strip(),
        assigned_to_id=assigned_to_id,
        status=status,
        image_url=image_url or '',
    )

    logger.info('task_created', task_id=str(task.id), flat_id=str(flat.id))
    return task


def _lock_task(*, task_id: UUID, user: User) -> Task:
    try:
        task = (
            Task.objects
            .select_for_update()
            .select_related('flat')
            .get(id=task_id)
        )
    except Task.DoesNotExist:
        raise TaskNotFoundError("Task not found")

    if not task.flat.has_member(user):
        raise NotFlatMemberError("Not allowed")
    return task


@transaction.atomic
def update_task(
    *,
    task_id: UUID,
    user: User,
    title=_UNSET,
    description=_UNSET,
    assigned_to_id=_UNSET,
    status=_UNSET,
    image_url=_UNSET,
) -> Task:
    """
    Edit a task. Only the given fields change; assigned_to_id=None unassigns.

    Raises:
        TaskNotFoundError: If task doesn't exist
        NotFlatMemberError: If user is not in the flat
        InvalidTaskError: If title is blank or assignee is not a member
    """
    task = _lock_task(task_id=task_id, user=user)

    if title is not _UNSET:
        if not (title or '').strip():
            raise InvalidTaskError("Title is required")
        task.title = title.strip()
    if description is not _UNSET:
        task.description = (description or '').strip()
    if assigned_to_id is not _UNSET:
        _check_assignee(task.flat, assigned_to_id)
        task.assigned_to_id = assigned_to_id
    if status is not _UNSET:
        task.status = status
    if image_url is not _UNSET:
        task.image_url = image_url or ''

    task.save()
    logger.info('task_updated', task_id=str(task.id), status=task.status)
    return task


@transaction.atomic
def delete_task(*, task_id: UUID, user: User) -> None:
    """
    Raises:
        TaskNotFoundError: If task doesn't exist
        NotFlatMemberError: If user is not in the flat
    """
    task = _lock_task(task_id=task_id, user=user)
    task.delete()
    logger.info('task_deleted', task_id=str(task_id), user_id=str(user.id))


def list_flat_tasks(
    *,
    flat_id: UUID,
    user: User,
    status: Optional[str] = None,
) -> QuerySet[Task]:
    """
    Tasks of a flat, newest first, optionally by status.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotFlatMemberError: If user is not a member
    """
    flat = _get_member_flat(flat_id=flat_id, user=user)

    queryset = (
        Task.objects
        .filter(flat=flat)
        .select_related('created_by', 'assigned_to')
        .order_by('-created_at')
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset
