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
def make_user(db):
    def _make(name):
        return User.objects.create_user(
            email=f'{name.lower()}@example.com',
            password='TestPass123!',
            display_name=name,
        )
    return _make


@pytest.fixture
def flatmates(make_user):
    """Ana (owner), Ben, Cat and Dan."""
    return {name: make_user(name) for name in ['Ana', 'Ben', 'Cat', 'Dan']}


@pytest.fixture
def flat(db, flatmates):
    owner = flatmates['Ana']
    flat = Flat.objects.create(name='Main Street 12', owner=owner)
    for name, user in flatmates.items():
        role = FlatRole.OWNER if user == owner else FlatRole.MEMBER
        FlatMembership.objects.create(user=user, flat=flat, role=role)
    return flat


@pytest.fixture
def add_expense(flat):
    def _add(paid_by, split, amount, title='Expense'):
        expense = Expense.objects.create(
            flat=flat,
            title=title,
            amount=Decimal(amount),
            paid_by=paid_by,
            created_by=paid_by,
        )
        expense.split_between.set(split)
        return expense
    return _add


@pytest.fixture
def scenario(flatmates, add_expense):
    """Ana +75, Ben +5, Cat -40, Dan -40."""
    ana, ben, cat, dan = (flatmates[n] for n in ['Ana', 'Ben', 'Cat', 'Dan'])
    add_expense(ana, [ana, ben, cat, dan], '100.00', 'Groceries')
    add_expense(ben, [cat, dan], '30.00', 'Pizza')
    return flatmates


@pytest.fixture
def client_for():
    return _client_for
