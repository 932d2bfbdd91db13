from django.db import models
from django.utils import timezone
import uuid


class InvitationStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REVOKED = 'revoked', 'Revoked'
    EXPIRED = 'expired', 'Expired'


class Invitation(models.Model):
    """Email invitation to join a flat. Only the token's hash is stored."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    flat = models.ForeignKey('flats.Flat', on_delete=models.CASCADE, related_name='invitations')
    email = models.EmailField(max_length=255)
    invited_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sent_invitations'
    )
    token_hash = models.CharField(max_length=64, unique=True)
    status = models.CharField(
        max_length=20,
        choices=InvitationStatus.choices,
        default=InvitationStatus.PENDING
    )
    expires_at = models.DateTimeField()
    accepted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='accepted_invitations'
    )
    accepted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'invitations'
        indexes = [
            models.Index(fields=['flat', 'email', 'status'], name='invitations_flat_email_idx'),
            models.Index(fields=['email', 'status'], name='invitations_email_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"Invite {self.email} to {self.flat.name} ({self.status})"

    @property
    def is_expired(self):
        return self.expires_at is None or self.expires_at < timezone.now()
