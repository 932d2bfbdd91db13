from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


class ExpenseCategory(models.TextChoices):
    GENERAL = 'general', 'General'
    RENT = 'rent', 'Rent'
    FOOD = 'food', 'Food'
    BILLS = 'bills', 'Bills'
    TRANSPORT = 'transport', 'Transport'
    SHOPPING = 'shopping', 'Shopping'
    ENTERTAINMENT = 'entertainment', 'Entertainment'
    OTHER = 'other', 'Other'


class Expense(models.Model):
    """Money one member paid on behalf of some members of the flat."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    flat = models.ForeignKey('flats.Flat', on_delete=models.CASCADE, related_name='expenses')
    title = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))]
    )
    paid_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='paid_expenses'
    )
    split_between = models.ManyToManyField('accounts.User', related_name='shared_expenses')
    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.GENERAL
    )
    date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='created_expenses'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'expenses'
        indexes = [
            models.Index(fields=['flat', '-date'], name='expenses_flat_date_idx'),
            models.Index(fields=['flat', 'category'], name='expenses_flat_category_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.title} ({self.amount}) in {self.flat.name}"
