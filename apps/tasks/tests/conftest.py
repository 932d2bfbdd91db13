import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from apps.tasks.models import Task


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner(db):
    return User.objects.create_user(email='owner@example.com', password='TestPass123!')


@pytest.fixture
def member(db):
    return User.objects.create_user(email='member@example.com', password='TestPass123!')


@pytest.fixture
def outsider(db):
    return User.objects.create_user(email='outsider@example.com', password='TestPass123!')


@pytest.fixture
def flat(db, owner, member):
    flat = Flat.objects.create(name='Main Street 12', owner=owner)
    FlatMembership.objects.create(user=owner, flat=flat, role=FlatRole.OWNER)
    FlatMembership.objects.create(user=member, flat=flat, role=FlatRole.MEMBER)
    return flat


@pytest.fixture
def task(db, flat, owner):
    return Task.objects.create(flat=flat, title='Take out trash', created_by=owner)


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
