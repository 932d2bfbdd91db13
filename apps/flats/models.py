from django.db import models
import uuid


class FlatRole(models.TextChoices):
    OWNER = 'owner', 'Owner'
    MEMBER = 'member', 'Member'


class Flat(models.Model):
    """A shared household; members split expenses and chores."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    owner = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='owned_flats')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'flats'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='flats_owner_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        if not getattr(user, 'is_authenticated', False):
            return False
        return self.memberships.filter(user=user).exists()

    def is_owner(self, user):
        return self.owner_id == getattr(user, 'id', None)

    def member_ids(self):
        """Ids of current members, in join order."""
        return list(self.memberships.order_by('joined_at').values_list('user_id', flat=True))


class FlatMembership(models.Model):
    """User membership in a flat with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='flat_memberships')
    flat = models.ForeignKey(Flat, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=FlatRole.choices, default=FlatRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'flat_memberships'
        unique_together = [['user', 'flat']]
        indexes = [
            models.Index(fields=['flat', 'role'], name='flat_memb_flat_role_idx'),
            models.Index(fields=['user', 'joined_at'], name='flat_memb_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.flat.name} ({self.role})"

    def save(self, *args, **kwargs):
        if self.flat.owner_id == self.user_id:
            self.role = FlatRole.OWNER
        super().save(*args, **kwargs)
