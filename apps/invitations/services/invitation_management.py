"""
Invitation management service.

Owners invite people to a flat by email. The raw token only ever leaves
the server inside the email; lookups go through its SHA-256 hash.
"""

from typing import List, Tuple
from uuid import UUID

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.flats.models import Flat
from apps.flats.services import ensure_membership
from apps.invitations.models import Invitation, InvitationStatus
from apps.invitations.tokens import (
    generate_invite_token,
    hash_token,
    invite_expiry,
    invite_link,
)
from config.logging import get_logger

from .exceptions import (
    FlatNotFoundError,
    InvitationNotFoundError,
    InsufficientPermissionsError,
    AlreadyMemberError,
    InvitationNotPendingError,
    InvitationExpiredError,
    InvitationEmailMismatchError,
    InvitationDeliveryError,
)

logger = get_logger(__name__)


def _get_owned_flat(*, flat_id: UUID, user: User, lock: bool = False) -> Flat:
    queryset = Flat.objects.select_for_update() if lock else Flat.objects.all()
    try:
        flat = queryset.get(id=flat_id)
    except Flat.DoesNotExist:
        raise FlatNotFoundError("Flat not found")

    if not flat.is_owner(user):
        raise InsufficientPermissionsError("Only owner can manage invitations")
    return flat


def _send_invitation_email(*, invitation: Invitation, raw_token: str) -> None:
    link = invite_link(raw_token)
    inviter = invitation.invited_by.get_display_name()
    flat_name = invitation.flat.name
    ttl = settings.INVITE_TTL_HOURS

    message = (
        f'You were invited by {inviter} to join the flat "{flat_name}".\n\n'
        f'Open this link to accept:\n{link}\n\n'
        f'This invitation expires in {ttl} hours.'
    )
    html_message = (
        '<div style="font-family: Arial, sans-serif; line-height: 1.4;">'
        '<h2 style="margin:0 0 12px;">You\'re invited</h2>'
        f'<p style="margin:0 0 12px;"><b>{inviter}</b> invited you to join: <b>{flat_name}</b></p>'
        f'<p style="margin:0 0 16px;"><a href="{link}">Accept invitation</a></p>'
        f'<p style="margin:0;color:#64748b;font-size:12px;">Link expires in {ttl} hours.</p>'
        '</div>'
    )

    try:
        send_mail(
            subject=f'Roomie · Invitation to join "{flat_name}"',
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[invitation.email],
            html_message=html_message,
            fail_silently=False,
        )
    except Exception as e:
        logger.error(
            'invitation_email_failed',
            invitation_id=str(invitation.id),
            flat_id=str(invitation.flat_id),
            error=str(e),
        )
        raise InvitationDeliveryError("Could not send invitation email") from e


@transaction.atomic
def create_invitation(
    *,
    flat_id: UUID,
    email: str,
    invited_by: User
) -> Tuple[Invitation, str]:
    """
    Invite an email address to a flat (owner only) and send the accept link.

    Earlier pending invitations to the same address for this flat are
    revoked. If the email cannot be sent the whole operation rolls back.

    Returns:
        (invitation, raw_token)

    Raises:
        FlatNotFoundError: If flat doesn't exist
        InsufficientPermissionsError: If invited_by is not the owner
        AlreadyMemberError: If the email belongs to a current member
        InvitationDeliveryError: If the email could not be sent
    """
    flat = _get_owned_flat(flat_id=flat_id, user=invited_by, lock=True)
    clean_email = User.objects.normalize_email(email)

    if flat.memberships.filter(user__email=clean_email).exists():
        raise AlreadyMemberError("This email is already a member")

    Invitation.objects.filter(
        flat=flat,
        email=clean_email,
        status=InvitationStatus.PENDING,
    ).update(status=InvitationStatus.REVOKED, updated_at=timezone.now())

    raw_token = generate_invite_token()
    invitation = Invitation.objects.create(
        flat=flat,
        email=clean_email,
        invited_by=invited_by,
        token_hash=hash_token(raw_token),
        expires_at=invite_expiry(),
    )

    _send_invitation_email(invitation=invitation, raw_token=raw_token)

    logger.info(
        'invitation_sent',
        invitation_id=str(invitation.id),
        flat_id=str(flat.id),
        invited_by=str(invited_by.id),
    )
    return invitation, raw_token


def list_pending_invitations(*, flat_id: UUID, user: User) -> QuerySet[Invitation]:
    """
    Pending invitations of a flat, newest first (owner only).

    Raises:
        FlatNotFoundError: If flat doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    flat = _get_owned_flat(flat_id=flat_id, user=user)
    return (
        Invitation.objects
        .filter(flat=flat, status=InvitationStatus.PENDING)
        .select_related('invited_by')
        .order_by('-created_at')
    )


@transaction.atomic
def revoke_invitation(*, invitation_id: UUID, user: User) -> Invitation:
    """
    Revoke a pending invitation (owner only).

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        InsufficientPermissionsError: If user is not the flat owner
        InvitationNotPendingError: If the invitation is no longer pending
    """
    try:
        invitation = (
            Invitation.objects
            .select_for_update()
            .select_related('flat')
            .get(id=invitation_id)
        )
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError("Invitation not found")

    if not invitation.flat.is_owner(user):
        raise InsufficientPermissionsError("Only owner can revoke invitations")

    if invitation.status != InvitationStatus.PENDING:
        raise InvitationNotPendingError(f"Invitation is {invitation.status}")

    invitation.status = InvitationStatus.REVOKED
    invitation.save(update_fields=['status', 'updated_at'])

    logger.info('invitation_revoked', invitation_id=str(invitation.id), revoked_by=str(user.id))
    return invitation


def _mark_accepted(invitation: Invitation, user: User) -> None:
    ensure_membership(flat=invitation.flat, user=user)
    invitation.status = InvitationStatus.ACCEPTED
    invitation.accepted_by = user
    invitation.accepted_at = timezone.now()
    invitation.save(update_fields=['status', 'accepted_by', 'accepted_at', 'updated_at'])
    logger.info(
        'invitation_accepted',
        invitation_id=str(invitation.id),
        flat_id=str(invitation.flat_id),
        user_id=str(user.id),
    )


def accept_invitation(*, token: str, user: User) -> Invitation:
    """
    Accept an invitation by its raw token.

    The logged-in user's email must match the invited address. An expired
    invitation is marked expired before the error is raised. Joining a flat
    the user is already in is not an error.

    Raises:
        InvitationNotFoundError: If no invitation matches the token
        InvitationNotPendingError: If the invitation is no longer pending
        InvitationExpiredError: If the invitation has expired
        InvitationEmailMismatchError: If the user's email differs
    """
    token_hash = hash_token(str(token).strip())

    # The expired status must persist even though the call fails
    expired = False
    with transaction.atomic():
        try:
            invitation = (
                Invitation.objects
                .select_for_update()
                .select_related('flat')
                .get(token_hash=token_hash)
            )
        except Invitation.DoesNotExist:
            raise InvitationNotFoundError("Invitation not found")

        if invitation.status != InvitationStatus.PENDING:
            raise InvitationNotPendingError(f"Invitation is {invitation.status}")

        if invitation.is_expired:
            invitation.status = InvitationStatus.EXPIRED
            invitation.save(update_fields=['status', 'updated_at'])
            expired = True
        elif invitation.email != User.objects.normalize_email(user.email):
            raise InvitationEmailMismatchError(
                f"This invitation was sent to {invitation.email}. "
                f"You are logged in as {user.email}."
            )
        else:
            _mark_accepted(invitation, user)

    if expired:
        logger.info('invitation_expired', invitation_id=str(invitation.id))
        raise InvitationExpiredError("Invitation expired")

    return invitation


@transaction.atomic
def accept_pending_invitations(*, user: User) -> List[Flat]:
    """
    Accept every pending, unexpired invitation addressed to user's email.

    Called right after registration. Expired ones are left for the
    accept flow to mark.

    Returns:
        Flats the user joined
    """
    invitations = (
        Invitation.objects
        .select_for_update()
        .select_related('flat')
        .filter(
            email=User.objects.normalize_email(user.email),
            status=InvitationStatus.PENDING,
            expires_at__gt=timezone.now(),
        )
    )

    flats = []
    for invitation in invitations:
        _mark_accepted(invitation, user)
        flats.append(invitation.flat)
    return flats
