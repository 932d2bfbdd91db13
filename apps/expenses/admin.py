from django.contrib import admin
from apps.expenses.models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    """Admin interface for Expenses."""

    list_display = ['title', 'flat', 'amount', 'paid_by', 'category', 'date']
    list_filter = ['category', 'date']
    search_fields = ['title', 'notes', 'flat__name', 'paid_by__email']
    readonly_fields = ['created_at', 'updated_at']
    filter_horizontal = ['split_between']
    date_hierarchy = 'date'
    ordering = ['-date']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('flat', 'paid_by')
