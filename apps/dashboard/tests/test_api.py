import pytest
from decimal import Decimal
from datetime import datetime
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.dashboard.dashboard import DashboardQueries


@pytest.mark.django_db
class TestFlatDashboard:
    """Tests for GET /api/flats/{flat_id}/dashboard/"""

    def test_summary(self, client_for, flat, owner, activity):
        url = reverse('dashboard:flat-dashboard', kwargs={'flat_id': flat.id})
        response = client_for(owner).get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['flat']['name'] == 'Main Street 12'
        summary = response.data['summary']
        assert summary['members_count'] == 2
        assert Decimal(summary['month_total']) == Decimal('840.00')
        assert summary['pending_tasks_count'] == 2
        assert summary['month_label'] == timezone.localtime().strftime('%B %Y')

    def test_recent_expenses(self, client_for, flat, owner, activity):
        url = reverse('dashboard:flat-dashboard', kwargs={'flat_id': flat.id})
        response = client_for(owner).get(url)

        titles = [expense['title'] for expense in response.data['recent_expenses']]
        assert len(titles) == 3
        assert titles[-1] == 'Old bill'

    def test_charts(self, client_for, flat, owner, activity):
        url = reverse('dashboard:flat-dashboard', kwargs={'flat_id': flat.id})
        response = client_for(owner).get(url)

        by_category = response.data['charts']['by_category']
        assert [row['name'] for row in by_category] == ['rent', 'food']
        assert Decimal(by_category[0]['total']) == Decimal('800.00')

        # Over all time: Ana paid 900 and owes 470, Ben paid 40 and owes 470
        by_user = response.data['charts']['by_user']
        assert [row['user']['display_name'] for row in by_user] == ['Ana', 'Ben']
        assert [Decimal(row['net']) for row in by_user] == [Decimal('430'), Decimal('-430')]

    def test_empty_flat(self, client_for, flat, owner):
        url = reverse('dashboard:flat-dashboard', kwargs={'flat_id': flat.id})
        response = client_for(owner).get(url)

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['summary']['month_total']) == Decimal('0')
        assert response.data['recent_expenses'] == []
        assert response.data['charts']['by_category'] == []

    def test_non_member_forbidden(self, client_for, flat, outsider):
        url = reverse('dashboard:flat-dashboard', kwargs={'flat_id': flat.id})
        response = client_for(outsider).get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestMonthRange:

    def test_december_rolls_over(self):
        now = timezone.make_aware(datetime(2024, 12, 15, 10, 30))
        start, end = DashboardQueries.month_range(now)

        assert (start.year, start.month, start.day, start.hour) == (2024, 12, 1, 0)
        assert (end.year, end.month, end.day) == (2025, 1, 1)

    def test_mid_year(self):
        now = timezone.make_aware(datetime(2024, 6, 30, 23, 0))
        start, end = DashboardQueries.month_range(now)

        assert (start.month, end.month) == (6, 7)
