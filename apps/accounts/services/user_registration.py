"""User registration service."""

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.invitations.services import accept_pending_invitations
from config.logging import get_logger

from .exceptions import UserRegistrationError

User = get_user_model()
logger = get_logger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = ""
) -> User:
    """
    Register a new user and join every flat they were already invited to.

    Pending, unexpired invitations addressed to the new email are accepted
    in the same transaction, so a fresh account lands directly in its flats.

    Args:
        email: User's email address (normalised to lowercase)
        password: User's password (will be hashed)
        display_name: Optional display name

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already registered
    """
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                display_name=display_name.strip()
            )
    except IntegrityError:
        raise UserRegistrationError("User already exists.")

    joined = accept_pending_invitations(user=user)
    logger.info('user_registered', user_id=str(user.id), flats_joined=len(joined))

    return user
