"""
Flat management service.

Handles flat CRUD operations with proper transaction safety.
"""

from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from config.logging import get_logger

from .exceptions import (
    FlatNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
)

logger = get_logger(__name__)


@transaction.atomic
def create_flat(*, name: str, owner: User, description: str = '') -> Flat:
    """
    Create a new flat and add the creator as owner.

    Args:
        name: Flat name
        owner: User who will own the flat
        description: Optional description

    Returns:
        Created Flat instance
    """
    flat = Flat.objects.create(
        name=name.strip(),
        owner=owner,
        description=description.strip(),
    )

    FlatMembership.objects.create(
        user=owner,
        flat=flat,
        role=FlatRole.OWNER
    )

    logger.info('flat_created', flat_id=str(flat.id), owner_id=str(owner.id))
    return flat


def get_flat_by_id(*, flat_id: UUID) -> Flat:
    """
    Get a flat by ID with its members prefetched.

    Raises:
        FlatNotFoundError: If flat doesn't exist
    """
    try:
        return (
            Flat.objects
            .select_related('owner')
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=FlatMembership.objects.select_related('user')
                )
            )
            .get(id=flat_id)
        )
    except Flat.DoesNotExist:
        raise FlatNotFoundError(f"Flat with ID {flat_id} not found")


def get_flat_for_member(*, flat_id: UUID, user: User) -> Flat:
    """
    Get a flat the user belongs to.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotMemberError: If user is not a member
    """
    flat = get_flat_by_id(flat_id=flat_id)
    if not flat.has_member(user):
        raise NotMemberError("Not allowed")
    return flat


@transaction.atomic
def update_flat(
    *,
    flat_id: UUID,
    user: User,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Flat:
    """
    Update flat details (owner only).

    Raises:
        FlatNotFoundError: If flat doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    try:
        flat = (
            Flat.objects
            .select_for_update()
            .get(id=flat_id)
        )
    except Flat.DoesNotExist:
        raise FlatNotFoundError(f"Flat with ID {flat_id} not found")

    if not flat.is_owner(user):
        raise InsufficientPermissionsError("Only the flat owner can update the flat")

    update_fields = ['updated_at']

    if name is not None:
        flat.name = name.strip()
        update_fields.append('name')

    if description is not None:
        flat.description = description.strip()
        update_fields.append('description')

    flat.save(update_fields=update_fields)

    return flat
