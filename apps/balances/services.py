"""
Balance services.

Load a flat's members and ledger, run the engine, and decorate the
result with user records for serialization.
"""

from typing import Dict, List, Tuple
from uuid import UUID

from apps.accounts.models import User
from apps.balances.engine import (
    EPSILON,
    ZERO,
    BalanceSheet,
    LedgerExpense,
    compute_balances,
    plan_settlements,
)
from apps.expenses.models import Expense
from apps.flats.models import Flat
from apps.flats.services import get_flat_for_member
from config.logging import get_logger

logger = get_logger(__name__)


def load_ledger(flat: Flat) -> List[LedgerExpense]:
    expenses = (
        Expense.objects
        .filter(flat=flat)
        .prefetch_related('split_between')
        .order_by('date', 'created_at')
    )
    return [
        LedgerExpense(
            id=expense.id,
            paid_by=expense.paid_by_id,
            split_between=[user.id for user in expense.split_between.all()],
            amount=expense.amount,
        )
        for expense in expenses
    ]


def compute_flat_sheet(flat: Flat) -> Tuple[BalanceSheet, Dict[UUID, User]]:
    """Run the calculator over a flat; returns the sheet and the users it mentions."""
    member_ids = flat.member_ids()
    sheet = compute_balances(member_ids, load_ledger(flat))

    if abs(sheet.drift) > EPSILON * max(len(sheet.balances), 1):
        logger.warning('balance_drift', flat_id=str(flat.id), drift=str(sheet.drift))
    if sheet.non_members:
        logger.info(
            'balance_includes_former_members',
            flat_id=str(flat.id),
            count=len(sheet.non_members),
        )

    users = User.objects.in_bulk(list(sheet.balances))
    return sheet, users


def _totals(sheet: BalanceSheet, users: Dict[UUID, User]) -> List[dict]:
    ordered = sorted(sheet.balances.items(), key=lambda item: (-item[1], str(item[0])))
    return [
        {
            'user': users.get(member_id),
            'net': net,
            'is_member': member_id not in sheet.non_members,
        }
        for member_id, net in ordered
    ]


def _transfers(transfers, users: Dict[UUID, User]) -> List[dict]:
    return [
        {
            'from': users.get(transfer.from_member),
            'to': users.get(transfer.to_member),
            'amount': transfer.amount,
        }
        for transfer in transfers
    ]


def get_flat_balance(*, flat_id: UUID, user: User) -> dict:
    """
    Net position of everyone in the flat plus a full settlement plan.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotMemberError: If user is not a member
    """
    flat = get_flat_for_member(flat_id=flat_id, user=user)
    sheet, users = compute_flat_sheet(flat)

    return {
        'totals': _totals(sheet, users),
        'settlements': _transfers(plan_settlements(sheet.balances), users),
        'warnings': sheet.warnings,
    }


def get_member_balance(*, flat_id: UUID, user: User) -> dict:
    """
    Everyone's net plus what the requesting user has to pay or collect.

    Raises:
        FlatNotFoundError: If flat doesn't exist
        NotMemberError: If user is not a member
    """
    flat = get_flat_for_member(flat_id=flat_id, user=user)
    sheet, users = compute_flat_sheet(flat)
    totals = _totals(sheet, users)

    me = {
        'user': user,
        'net': sheet.balances.get(user.id, ZERO),
        'is_member': user.id not in sheet.non_members,
    }
    mine = plan_settlements(sheet.balances, focus_member=user.id)

    return {
        'per_user': totals,
        'me': me,
        'settlements_for_user': _transfers(mine, users),
    }
