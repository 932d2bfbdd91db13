"""
Service layer tests for expenses app.

Tests creation rules (payer and split membership, default split),
creator-only edits and filtering.
"""

import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from uuid import uuid4

from apps.expenses.models import Expense
from apps.expenses.services import (
    create_expense,
    get_expense_for_member,
    update_expense,
    delete_expense,
    list_flat_expenses,
    FlatNotFoundError,
    ExpenseNotFoundError,
    NotFlatMemberError,
    NotExpenseCreatorError,
    InvalidExpenseError,
)


@pytest.mark.django_db
class TestCreateExpense:

    def test_create_with_explicit_split(self, flat, owner, member):
        expense = create_expense(
            flat_id=flat.id,
            created_by=member,
            title=' Pizza ',
            amount=Decimal('24.50'),
            paid_by_id=member.id,
            split_between_ids=[member.id, owner.id, member.id],
        )

        assert expense.title == 'Pizza'
        assert expense.created_by == member
        assert set(expense.split_between.all()) == {owner, member}

    def test_missing_split_defaults_to_all_members(self, flat, owner, member):
        expense = create_expense(
            flat_id=flat.id,
            created_by=owner,
            title='Internet',
            amount=Decimal('30.00'),
            paid_by_id=owner.id,
            split_between_ids=[],
        )

        assert set(expense.split_between.all()) == {owner, member}

    def test_payer_must_be_member(self, flat, owner, outsider):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                flat_id=flat.id,
                created_by=owner,
                title='Rent',
                amount=Decimal('900'),
                paid_by_id=outsider.id,
            )

    def test_participants_must_be_members(self, flat, owner, outsider):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                flat_id=flat.id,
                created_by=owner,
                title='Rent',
                amount=Decimal('900'),
                paid_by_id=owner.id,
                split_between_ids=[owner.id, outsider.id],
            )

    def test_blank_title_rejected(self, flat, owner):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                flat_id=flat.id,
                created_by=owner,
                title='   ',
                amount=Decimal('1'),
                paid_by_id=owner.id,
            )

    def test_negative_amount_rejected(self, flat, owner):
        with pytest.raises(InvalidExpenseError):
            create_expense(
                flat_id=flat.id,
                created_by=owner,
                title='Refund',
                amount=Decimal('-5'),
                paid_by_id=owner.id,
            )

    def test_non_member_cannot_create(self, flat, outsider):
        with pytest.raises(NotFlatMemberError):
            create_expense(
                flat_id=flat.id,
                created_by=outsider,
                title='Sneaky',
                amount=Decimal('5'),
                paid_by_id=outsider.id,
            )

    def test_unknown_flat(self, owner):
        with pytest.raises(FlatNotFoundError):
            create_expense(
                flat_id=uuid4(),
                created_by=owner,
                title='Ghost',
                amount=Decimal('5'),
                paid_by_id=owner.id,
            )


@pytest.mark.django_db
class TestEditExpense:

    def test_creator_can_update_fields(self, expense, owner, member):
        updated = update_expense(
            expense_id=expense.id,
            user=owner,
            amount=Decimal('75.00'),
            split_between_ids=[member.id],
        )

        assert updated.amount == Decimal('75.00')
        assert list(updated.split_between.all()) == [member]
        assert updated.title == 'Groceries'

    def test_empty_split_on_edit_rejected(self, expense, owner):
        with pytest.raises(InvalidExpenseError):
            update_expense(expense_id=expense.id, user=owner, split_between_ids=[])

    def test_only_creator_can_update(self, expense, member):
        with pytest.raises(NotExpenseCreatorError):
            update_expense(expense_id=expense.id, user=member, title='Mine now')

    def test_only_creator_can_delete(self, expense, member):
        with pytest.raises(NotExpenseCreatorError):
            delete_expense(expense_id=expense.id, user=member)

    def test_delete(self, expense, owner):
        delete_expense(expense_id=expense.id, user=owner)

        assert not Expense.objects.filter(id=expense.id).exists()

    def test_get_for_member(self, expense, member, outsider):
        assert get_expense_for_member(expense_id=expense.id, user=member) == expense
        with pytest.raises(NotFlatMemberError):
            get_expense_for_member(expense_id=expense.id, user=outsider)

    def test_get_unknown(self, owner):
        with pytest.raises(ExpenseNotFoundError):
            get_expense_for_member(expense_id=uuid4(), user=owner)


@pytest.mark.django_db
class TestListExpenses:

    def _make(self, flat, user, title, category, when):
        expense = Expense.objects.create(
            flat=flat,
            title=title,
            amount=Decimal('10'),
            paid_by=user,
            category=category,
            date=when,
            created_by=user,
        )
        expense.split_between.set([user])
        return expense

    def test_newest_first_and_filters(self, flat, owner):
        older = self._make(flat, owner, 'Old rent', 'rent', datetime(2024, 1, 5, 12, tzinfo=dt_timezone.utc))
        newer = self._make(flat, owner, 'Dinner', 'food', datetime(2024, 2, 5, 12, tzinfo=dt_timezone.utc))

        assert list(list_flat_expenses(flat_id=flat.id, user=owner)) == [newer, older]
        assert list(list_flat_expenses(flat_id=flat.id, user=owner, category='rent')) == [older]
        assert list(list_flat_expenses(
            flat_id=flat.id,
            user=owner,
            date_from=datetime(2024, 2, 1).date(),
        )) == [newer]
        assert list(list_flat_expenses(
            flat_id=flat.id,
            user=owner,
            date_to=datetime(2024, 1, 31).date(),
        )) == [older]
