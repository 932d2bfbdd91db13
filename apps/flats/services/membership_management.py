"""
Membership management service.

Handles flat membership operations with concurrency protection.
"""

from typing import Tuple
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from config.logging import get_logger

from .exceptions import (
    FlatNotFoundError,
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
)

logger = get_logger(__name__)


def _lock_flat(flat_id: UUID) -> Flat:
    try:
        return (
            Flat.objects
            .select_for_update()
            .get(id=flat_id)
        )
    except Flat.DoesNotExist:
        raise FlatNotFoundError(f"Flat with ID {flat_id} not found")


@transaction.atomic
def ensure_membership(*, flat: Flat, user: User) -> Tuple[FlatMembership, bool]:
    """
    Add user to the flat unless they are already in it.

    Used by invitation acceptance, where joining twice is not an error.

    Returns:
        (membership, created)
    """
    membership, created = FlatMembership.objects.get_or_create(
        flat=flat,
        user=user,
        defaults={'role': FlatRole.MEMBER},
    )
    if created:
        logger.info('flat_member_joined', flat_id=str(flat.id), user_id=str(user.id))
    return membership, created


@transaction.atomic
def add_member(*, flat_id: UUID, email: str, added_by: User) -> FlatMembership:
    """
    Add an existing account to the flat by email (owner only).

    Uses row-level locking on the flat so concurrent adds can't race
    past the membership check.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        InsufficientPermissionsError: If added_by is not the owner
        UserNotFoundError: If no account has that email
        AlreadyMemberError: If the user is already a member
    """
    flat = _lock_flat(flat_id)

    if not flat.is_owner(added_by):
        raise InsufficientPermissionsError("Only owner can add members")

    try:
        user_to_add = User.objects.get(email=User.objects.normalize_email(email))
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if flat.has_member(user_to_add):
        raise AlreadyMemberError("User is already a member")

    try:
        membership = FlatMembership.objects.create(
            user=user_to_add,
            flat=flat,
            role=FlatRole.MEMBER
        )
    except IntegrityError:
        raise AlreadyMemberError("User is already a member")

    logger.info(
        'flat_member_added',
        flat_id=str(flat.id),
        user_id=str(user_to_add.id),
        added_by=str(added_by.id),
    )
    return membership


@transaction.atomic
def leave_flat(*, flat_id: UUID, user: User) -> None:
    """
    Leave a flat.

    The owner cannot leave their own flat. Expenses the member took part
    in stay on the ledger and keep counting towards their balance.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotMemberError: If user is not a member
        OwnerCannotLeaveError: If user is the owner
    """
    flat = _lock_flat(flat_id)

    if flat.is_owner(user):
        raise OwnerCannotLeaveError("Flat owner cannot leave the flat")

    deleted, _ = FlatMembership.objects.filter(user=user, flat=flat).delete()
    if not deleted:
        raise NotMemberError(f"User is not a member of {flat.name}")

    logger.info('flat_member_left', flat_id=str(flat.id), user_id=str(user.id))


@transaction.atomic
def remove_member(
    *,
    flat_id: UUID,
    user_id: UUID,
    removed_by: User
) -> None:
    """
    Remove a member from a flat (owner only).

    Raises:
        FlatNotFoundError: If flat doesn't exist
        InsufficientPermissionsError: If removed_by is not the owner
        CannotRemoveOwnerError: If trying to remove the owner
        NotMemberError: If target user is not a member
    """
    flat = _lock_flat(flat_id)

    if not flat.is_owner(removed_by):
        raise InsufficientPermissionsError("Only owner can remove members")

    if str(flat.owner_id) == str(user_id):
        raise CannotRemoveOwnerError("Owner cannot be removed")

    deleted, _ = FlatMembership.objects.filter(flat=flat, user_id=user_id).delete()
    if not deleted:
        raise NotMemberError("User is not a member of this flat")

    logger.info(
        'flat_member_removed',
        flat_id=str(flat.id),
        user_id=str(user_id),
        removed_by=str(removed_by.id),
    )


def get_flat_members(*, flat_id: UUID) -> QuerySet[FlatMembership]:
    """
    Get all members of a flat, owner first.

    Raises:
        FlatNotFoundError: If flat doesn't exist
    """
    if not Flat.objects.filter(id=flat_id).exists():
        raise FlatNotFoundError(f"Flat with ID {flat_id} not found")

    # 'owner' sorts after 'member', so descending role puts the owner first
    return (
        FlatMembership.objects
        .filter(flat_id=flat_id)
        .select_related('user')
        .order_by('-role', 'joined_at')
    )
