"""
Dashboard queries.

Read-only aggregation behind the flat dashboard: a summary of the current
calendar month, the latest expenses, spending by category and each
member's net balance.

Example::

    from apps.dashboard.dashboard import DashboardQueries

    data = DashboardQueries.flat_dashboard(flat)
    print(data['summary']['month_total'])
"""

from datetime import datetime
from decimal import Decimal

from django.db.models import Sum, Q
from django.utils import timezone

from apps.balances.services import compute_flat_sheet
from apps.expenses.models import Expense
from apps.tasks.models import Task, TaskStatus


class DashboardQueries:
    """
    Static query helpers for the dashboard endpoint.

    All methods return plain dictionaries or lists of model instances,
    ready for the response serializers.
    """

    RECENT_LIMIT = 5

    @staticmethod
    def month_range(now=None):
        """Start (inclusive) and end (exclusive) of the current local month."""
        now = timezone.localtime(now or timezone.now())
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
        return start, end

    @staticmethod
    def spending_by_category(flat, start: datetime, end: datetime):
        """Totals per category in [start, end), largest first."""
        rows = (
            Expense.objects
            .filter(flat=flat, date__gte=start, date__lt=end)
            .values('category')
            .annotate(total=Sum('amount'))
            .order_by('-total', 'category')
        )
        return [{'name': row['category'], 'total': row['total']} for row in rows]

    @staticmethod
    def net_by_member(flat):
        """Net balance of current members over the whole ledger, highest first."""
        sheet, users = compute_flat_sheet(flat)
        member_ids = set(flat.member_ids())
        rows = [
            {'user': users[member_id], 'net': net}
            for member_id, net in sheet.balances.items()
            if member_id in member_ids
        ]
        rows.sort(key=lambda row: (-row['net'], str(row['user'].id)))
        return rows

    @classmethod
    def flat_dashboard(cls, flat, now=None):
        start, end = cls.month_range(now)

        month_total = (
            Expense.objects
            .filter(flat=flat, date__gte=start, date__lt=end)
            .aggregate(total=Sum('amount'))['total']
        ) or Decimal('0.00')

        pending_tasks = Task.objects.filter(
            Q(status=TaskStatus.PENDING) | Q(status=TaskStatus.DOING),
            flat=flat,
        ).count()

        recent_expenses = (
            Expense.objects
            .filter(flat=flat)
            .select_related('paid_by', 'created_by')
            .prefetch_related('split_between')
            .order_by('-date', '-created_at')[:cls.RECENT_LIMIT]
        )

        return {
            'flat': flat,
            'summary': {
                'members_count': flat.memberships.count(),
                'month_total': month_total,
                'pending_tasks_count': pending_tasks,
                'month_label': start.strftime('%B %Y'),
            },
            'recent_expenses': list(recent_expenses),
            'charts': {
                'by_category': cls.spending_by_category(flat, start, end),
                'by_user': cls.net_by_member(flat),
            },
        }
