"""
Domain-specific exceptions for flats app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class FlatsServiceError(Exception):
    """Base exception for all flats service errors."""
    pass


class FlatNotFoundError(FlatsServiceError):
    """Raised when a flat does not exist."""
    pass


class UserNotFoundError(FlatsServiceError):
    """Raised when no account matches the given email."""
    pass


class AlreadyMemberError(FlatsServiceError):
    """Raised when a user is already in the flat."""
    pass


class NotMemberError(FlatsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class OwnerCannotLeaveError(FlatsServiceError):
    """Raised when a flat owner tries to leave their flat."""
    pass


class CannotRemoveOwnerError(FlatsServiceError):
    """Raised when attempting to remove the flat owner."""
    pass


class InsufficientPermissionsError(FlatsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
