import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from apps.invitations.models import Invitation
from apps.invitations.tokens import generate_invite_token, hash_token


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def invited_flat(db, user):
    """A flat owned by ``user`` with a pending invitation for newcomer@example.com."""
    flat = Flat.objects.create(name='Invite Street 1', owner=user)
    FlatMembership.objects.create(user=user, flat=flat, role=FlatRole.OWNER)
    Invitation.objects.create(
        flat=flat,
        email='newcomer@example.com',
        invited_by=user,
        token_hash=hash_token(generate_invite_token()),
        expires_at=timezone.now() + timedelta(hours=48),
    )
    return flat
