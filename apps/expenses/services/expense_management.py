"""
Expense management service.

Payer and participants must be current members of the flat. An expense
created without a split is shared by everyone in the flat at that moment.
"""

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.expenses.models import Expense, ExpenseCategory
from apps.flats.models import Flat
from config.logging import get_logger

from .exceptions import (
    FlatNotFoundError,
    ExpenseNotFoundError,
    NotFlatMemberError,
    NotExpenseCreatorError,
    InvalidExpenseError,
)

logger = get_logger(__name__)

_UNSET = object()


def _get_member_flat(*, flat_id: UUID, user: User) -> Flat:
    try:
        flat = Flat.objects.get(id=flat_id)
    except Flat.DoesNotExist:
        raise FlatNotFoundError("Flat not found")

    if not flat.has_member(user):
        raise NotFlatMemberError("Not allowed")
    return flat


def _resolve_participants(flat: Flat, user_ids: Iterable[UUID]) -> List[UUID]:
    member_ids = flat.member_ids()
    requested = list(dict.fromkeys(str(user_id) for user_id in user_ids))
    allowed = {str(member_id): member_id for member_id in member_ids}

    unknown = [user_id for user_id in requested if user_id not in allowed]
    if unknown:
        raise InvalidExpenseError("split_between must only contain flat members")
    return [allowed[user_id] for user_id in requested]


def _check_payer(flat: Flat, paid_by_id: UUID) -> None:
    if str(paid_by_id) not in {str(member_id) for member_id in flat.member_ids()}:
        raise InvalidExpenseError("paid_by must be a flat member")


def _check_amount(amount: Decimal) -> None:
    if amount is None or not amount.is_finite() or amount < 0:
        raise InvalidExpenseError("Amount must be a number >= 0")


@transaction.atomic
def create_expense(
    *,
    flat_id: UUID,
    created_by: User,
    title: str,
    amount: Decimal,
    paid_by_id: UUID,
    split_between_ids: Optional[Iterable[UUID]] = None,
    category: str = ExpenseCategory.GENERAL,
    date: Optional[datetime] = None,
    notes: str = '',
    image_url: str = '',
) -> Expense:
    """
    Record an expense in a flat.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotFlatMemberError: If created_by is not a member
        InvalidExpenseError: If title, amount, payer or participants are invalid
    """
    flat = _get_member_flat(flat_id=flat_id, user=created_by)

    if not (title or '').strip():
        raise InvalidExpenseError("Title is required")
    _check_amount(amount)
    _check_payer(flat, paid_by_id)

    split_between_ids = list(split_between_ids or [])
    if split_between_ids:
        participants = _resolve_participants(flat, split_between_ids)
    else:
        participants = flat.member_ids()

    fields = {}
    if date is not None:
        fields['date'] = date

    expense = Expense.objects.create(
        flat=flat,
        created_by=created_by,
        title=title.strip(),
        amount=amount,
        paid_by_id=paid_by_id,
        category=category,
        notes=(notes or '').strip(),
        image_url=image_url or '',
        **fields,
    )
    expense.split_between.set(participants)

    logger.info(
        'expense_created',
        expense_id=str(expense.id),
        flat_id=str(flat.id),
        amount=str(amount),
        participants=len(participants),
    )
    return expense


def get_expense_for_member(*, expense_id: UUID, user: User) -> Expense:
    """
    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        NotFlatMemberError: If user is not in the expense's flat
    """
    try:
        expense = (
            Expense.objects
            .select_related('flat', 'paid_by', 'created_by')
            .prefetch_related('split_between')
            .get(id=expense_id)
        )
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    if not expense.flat.has_member(user):
        raise NotFlatMemberError("Not allowed")
    return expense


def _lock_own_expense(*, expense_id: UUID, user: User, verb: str) -> Expense:
    try:
        expense = (
            Expense.objects
            .select_for_update()
            .select_related('flat')
            .get(id=expense_id)
        )
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError("Expense not found")

    if not expense.flat.has_member(user):
        raise NotFlatMemberError("Not allowed")
    if expense.created_by_id != user.id:
        raise NotExpenseCreatorError(f"Only the creator can {verb} this expense")
    return expense


@transaction.atomic
def update_expense(
    *,
    expense_id: UUID,
    user: User,
    title=_UNSET,
    amount=_UNSET,
    paid_by_id=_UNSET,
    split_between_ids=_UNSET,
    category=_UNSET,
    date=_UNSET,
    notes=_UNSET,
    image_url=_UNSET,
) -> Expense:
    """
    Edit an expense (creator only). Only the given fields change.

    An explicitly empty split is rejected rather than defaulted.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        NotFlatMemberError: If user is not in the flat
        NotExpenseCreatorError: If user did not create the expense
        InvalidExpenseError: If new values break expense rules
    """
    expense = _lock_own_expense(expense_id=expense_id, user=user, verb='edit')
    flat = expense.flat

    if title is not _UNSET:
        if not (title or '').strip():
            raise InvalidExpenseError("Title is required")
        expense.title = title.strip()
    if amount is not _UNSET:
        _check_amount(amount)
        expense.amount = amount
    if paid_by_id is not _UNSET:
        _check_payer(flat, paid_by_id)
        expense.paid_by_id = paid_by_id
    if category is not _UNSET:
        expense.category = category
    if date is not _UNSET:
        expense.date = date
    if notes is not _UNSET:
        expense.notes = (notes or '').strip()
    if image_url is not _UNSET:
        expense.image_url = image_url or ''

    participants = None
    if split_between_ids is not _UNSET:
        split_between_ids = list(split_between_ids or [])
        if not split_between_ids:
            raise InvalidExpenseError("split_between must be a non-empty array")
        participants = _resolve_participants(flat, split_between_ids)

    expense.save()
    if participants is not None:
        expense.split_between.set(participants)

    logger.info('expense_updated', expense_id=str(expense.id), user_id=str(user.id))
    return expense


@transaction.atomic
def delete_expense(*, expense_id: UUID, user: User) -> None:
    """
    Delete an expense (creator only).

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        NotFlatMemberError: If user is not in the flat
        NotExpenseCreatorError: If user did not create the expense
    """
    expense = _lock_own_expense(expense_id=expense_id, user=user, verb='delete')
    expense.delete()
    logger.info('expense_deleted', expense_id=str(expense_id), user_id=str(user.id))


def list_flat_expenses(
    *,
    flat_id: UUID,
    user: User,
    category: Optional[str] = None,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None,
) -> QuerySet[Expense]:
    """
    Expenses of a flat, newest date first.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotFlatMemberError: If user is not a member
    """
    flat = _get_member_flat(flat_id=flat_id, user=user)

    queryset = (
        Expense.objects
        .filter(flat=flat)
        .select_related('paid_by', 'created_by')
        .prefetch_related('split_between')
        .order_by('-date', '-created_at')
    )
    if category:
        queryset = queryset.filter(category=category)
    if date_from:
        queryset = queryset.filter(date__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__date__lte=date_to)
    return queryset
