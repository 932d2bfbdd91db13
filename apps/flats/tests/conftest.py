import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner(db):
    """Create and return the flat owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Flat Owner',
    )


@pytest.fixture
def member(db):
    """Create and return a regular flatmate."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Flat Member',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user not in any flat."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def flat(db, owner, member):
    """Create a flat with an owner and one member."""
    flat = Flat.objects.create(name='Main Street 12', description='Top floor', owner=owner)
    FlatMembership.objects.create(user=owner, flat=flat, role=FlatRole.OWNER)
    FlatMembership.objects.create(user=member, flat=flat, role=FlatRole.MEMBER)
    return flat


@pytest.fixture
def owner_client(owner):
    """Return API client authenticated as flat owner."""
    return _client_for(owner)


@pytest.fixture
def member_client(member):
    """Return API client authenticated as flat member."""
    return _client_for(member)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as a non-member."""
    return _client_for(outsider)
