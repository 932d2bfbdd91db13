import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.flats.models import Flat, FlatMembership, FlatRole
from apps.expenses.models import Expense
from apps.tasks.models import Task, TaskStatus


@pytest.fixture
def owner(db):
    return User.objects.create_user(email='owner@example.com', password='TestPass123!', display_name='Ana')


@pytest.fixture
def member(db):
    return User.objects.create_user(email='member@example.com', password='TestPass123!', display_name='Ben')


@pytest.fixture
def outsider(db):
    return User.objects.create_user(email='outsider@example.com', password='TestPass123!')


@pytest.fixture
def flat(db, owner, member):
    flat = Flat.objects.create(name='Main Street 12', description='Top floor', owner=owner)
    FlatMembership.objects.create(user=owner, flat=flat, role=FlatRole.OWNER)
    FlatMembership.objects.create(user=member, flat=flat, role=FlatRole.MEMBER)
    return flat


@pytest.fixture
def activity(flat, owner, member):
    """Two expenses this month, one last year, and a few tasks."""
    now = timezone.now()

    def add(title, amount, category, paid_by, when):
        expense = Expense.objects.create(
            flat=flat,
            title=title,
            amount=Decimal(amount),
            category=category,
            paid_by=paid_by,
            created_by=paid_by,
            date=when,
        )
        expense.split_between.set([owner, member])
        return expense

    add('Rent', '800.00', 'rent', owner, now)
    add('Dinner', '40.00', 'food', member, now)
    add('Old bill', '100.00', 'bills', owner, now - timedelta(days=400))

    Task.objects.create(flat=flat, title='Dishes', created_by=owner, status=TaskStatus.PENDING)
    Task.objects.create(flat=flat, title='Laundry', created_by=owner, status=TaskStatus.DOING)
    Task.objects.create(flat=flat, title='Windows', created_by=owner, status=TaskStatus.DONE)


@pytest.fixture
def client_for():
    def _client_for(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return _client_for
