"""
Domain-specific exceptions for invitations app.

Caught in views and converted to HTTP responses.
"""


class InvitationsServiceError(Exception):
    """Base exception for all invitations service errors."""
    pass


class FlatNotFoundError(InvitationsServiceError):
    pass


class InvitationNotFoundError(InvitationsServiceError):
    pass


class InsufficientPermissionsError(InvitationsServiceError):
    """Raised when a non-owner manages invitations."""
    pass


class AlreadyMemberError(InvitationsServiceError):
    """Raised when the invited email already belongs to a member."""
    pass


class InvitationNotPendingError(InvitationsServiceError):
    """Raised when acting on an accepted, revoked or expired invitation."""
    pass


class InvitationExpiredError(InvitationsServiceError):
    pass


class InvitationEmailMismatchError(InvitationsServiceError):
    """Raised when the invitation was sent to a different address."""
    pass


class InvitationDeliveryError(InvitationsServiceError):
    """Raised when the invitation email could not be sent."""
    pass
