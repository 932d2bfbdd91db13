import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from apps.invitations.models import Invitation, InvitationStatus
from apps.invitations.tokens import generate_invite_token, hash_token


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Flat Owner',
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Flat Member',
    )


@pytest.fixture
def invitee(db):
    """Existing account that has been invited but not yet joined."""
    return User.objects.create_user(
        email='invitee@example.com',
        password='TestPass123!',
        display_name='Invitee',
    )


@pytest.fixture
def flat(db, owner, member):
    flat = Flat.objects.create(name='Main Street 12', owner=owner)
    FlatMembership.objects.create(user=owner, flat=flat, role=FlatRole.OWNER)
    FlatMembership.objects.create(user=member, flat=flat, role=FlatRole.MEMBER)
    return flat


@pytest.fixture
def make_invitation(db, flat, owner):
    """Factory creating an invitation directly; returns (invitation, raw_token)."""
    def _make(email='invitee@example.com', status=InvitationStatus.PENDING, expires_in_hours=48):
        raw_token = generate_invite_token()
        invitation = Invitation.objects.create(
            flat=flat,
            email=email,
            invited_by=owner,
            token_hash=hash_token(raw_token),
            status=status,
            expires_at=timezone.now() + timedelta(hours=expires_in_hours),
        )
        return invitation, raw_token
    return _make


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def invitee_client(invitee):
    return _client_for(invitee)
