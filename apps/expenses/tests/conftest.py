import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from apps.expenses.models import Expense


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
        display_name='Ana',
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Ben',
    )


@pytest.fixture
def outsider(db):
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Olga',
    )


@pytest.fixture
def flat(db, owner, member):
    flat = Flat.objects.create(name='Main Street 12', owner=owner)
    FlatMembership.objects.create(user=owner, flat=flat, role=FlatRole.OWNER)
    FlatMembership.objects.create(user=member, flat=flat, role=FlatRole.MEMBER)
    return flat


@pytest.fixture
def expense(db, flat, owner, member):
    """Groceries paid by the owner, split with the member."""
    expense = Expense.objects.create(
        flat=flat,
        title='Groceries',
        amount=Decimal('60.00'),
        paid_by=owner,
        category='food',
        created_by=owner,
    )
    expense.split_between.set([owner, member])
    return expense


@pytest.fixture
def owner_client(owner):
    return _client_for(owner)


@pytest.fixture
def member_client(member):
    return _client_for(member)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)
