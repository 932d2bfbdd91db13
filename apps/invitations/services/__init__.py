"""
Invitations app services layer.
"""

from .exceptions import (
    InvitationsServiceError,
    FlatNotFoundError,
    InvitationNotFoundError,
    InsufficientPermissionsError,
    AlreadyMemberError,
    InvitationNotPendingError,
    InvitationExpiredError,
    InvitationEmailMismatchError,
    InvitationDeliveryError,
)

from .invitation_management import (
    create_invitation,
    list_pending_invitations,
    revoke_invitation,
    accept_invitation,
    accept_pending_invitations,
)


__all__ = [
    # Exceptions
    'InvitationsServiceError',
    'FlatNotFoundError',
    'InvitationNotFoundError',
    'InsufficientPermissionsError',
    'AlreadyMemberError',
    'InvitationNotPendingError',
    'InvitationExpiredError',
    'InvitationEmailMismatchError',
    'InvitationDeliveryError',

    # Invitation Management
    'create_invitation',
    'list_pending_invitations',
    'revoke_invitation',
    'accept_invitation',
    'accept_pending_invitations',
]
