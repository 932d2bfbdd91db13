"""
Flats app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    FlatsServiceError,
    FlatNotFoundError,
    UserNotFoundError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    InsufficientPermissionsError,
)

from .flat_management import (
    create_flat,
    update_flat,
    get_flat_by_id,
    get_flat_for_member,
)

from .membership_management import (
    add_member,
    ensure_membership,
    leave_flat,
    remove_member,
    get_flat_members,
)


__all__ = [
    # Exceptions
    'FlatsServiceError',
    'FlatNotFoundError',
    'UserNotFoundError',
    'AlreadyMemberError',
    'NotMemberError',
    'OwnerCannotLeaveError',
    'CannotRemoveOwnerError',
    'InsufficientPermissionsError',

    # Flat Management
    'create_flat',
    'update_flat',
    'get_flat_by_id',
    'get_flat_for_member',

    # Membership Management
    'add_member',
    'ensure_membership',
    'leave_flat',
    'remove_member',
    'get_flat_members',
]
