"""
Balance and settlement engine.

Pure functions over a flat's member ids and its expense ledger; no
database access. Amounts come in and go out as ``Decimal``. Shares are
accumulated as exact fractions, each net is rounded once (half up, to the
cent) at the end, and the rounded values are what the planner consumes.

    sheet = compute_balances(member_ids, ledger)
    transfers = plan_settlements(sheet.balances)
    mine = plan_settlements(sheet.balances, focus_member=user_id)
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from fractions import Fraction
import math
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Union

from config.logging import get_logger

logger = get_logger(__name__)

# Smallest meaningful amount of money. Below it a balance counts as settled.
EPSILON = Decimal('0.01')
CENT = Decimal('0.01')
ZERO = Decimal('0.00')


@dataclass(frozen=True)
class LedgerExpense:
    """
    The part of an expense the engine needs.

    ``split_between`` is a list or tuple of member ids. ``amount`` is
    anything ``Decimal`` accepts; bad values are skipped, not raised.
    """

    id: Hashable
    paid_by: Optional[Hashable]
    split_between: Sequence[Hashable]
    amount: Union[Decimal, int, float, str, None]


@dataclass(frozen=True)
class Transfer:
    """``from_member`` pays ``to_member`` ``amount`` to settle up."""

    from_member: Hashable
    to_member: Hashable
    amount: Decimal


@dataclass
class BalanceSheet:
    balances: Dict[Hashable, Decimal]
    non_members: List[Hashable] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def drift(self) -> Decimal:
        """Sum of rounded nets; zero up to one cent per member."""
        return sum(self.balances.values(), ZERO)


def round_money(value: Decimal) -> Decimal:
    rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
    # Avoid "-0.00"
    return rounded if rounded else ZERO


def _round_exact(value: Fraction) -> Decimal:
    """Half-up rounding of an exact fraction to whole cents."""
    cents = math.floor(abs(value) * 100 + Fraction(1, 2))
    if value < 0:
        cents = -cents
    return round_money(Decimal(cents) / 100)


def _clean_amount(raw) -> Optional[Decimal]:
    """Return a finite, non-negative Decimal or None."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        amount = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def compute_balances(
    members: Iterable[Hashable],
    expenses: Iterable[LedgerExpense],
) -> BalanceSheet:
    """
    Reduce an expense ledger to each member's net position.

    Net is what a member fronted minus their share of what they took part
    in: positive means the flat owes them, negative means they owe.

    Every id in ``members`` is present in the result, with 0.00 if it has
    no expenses. Ids that only show up in the ledger (someone who has left
    the flat) are still accumulated and listed in ``non_members``.

    Expenses with no payer, an empty (or non-list) split, or an amount that
    is missing, negative, NaN or infinite are skipped and reported in
    ``warnings``.
    """
    net: Dict[Hashable, Fraction] = {member: Fraction(0) for member in members}
    non_members: List[Hashable] = []
    warnings: List[str] = []

    def _account(member_id):
        if member_id not in net:
            net[member_id] = Fraction(0)
            non_members.append(member_id)
        return member_id

    for expense in expenses:
        amount = _clean_amount(expense.amount)
        if amount is None:
            warnings.append(f"Skipped expense {expense.id}: invalid amount {expense.amount!r}")
            continue

        if expense.paid_by is None:
            warnings.append(f"Skipped expense {expense.id}: no payer")
            continue

        if isinstance(expense.split_between, (str, bytes)):
            warnings.append(f"Skipped expense {expense.id}: split_between must be a list of member ids")
            continue

        participants = list(dict.fromkeys(expense.split_between or ()))
        if not participants:
            warnings.append(f"Skipped expense {expense.id}: nobody to split with")
            continue

        amount = Fraction(amount)
        share = amount / len(participants)
        net[_account(expense.paid_by)] += amount
        for participant in participants:
            net[_account(participant)] -= share

    for warning in warnings:
        logger.warning('expense_skipped', detail=warning)
    if non_members:
        logger.info(
            'balance_non_members',
            non_members=[str(member) for member in non_members],
        )

    return BalanceSheet(
        balances={member: _round_exact(value) for member, value in net.items()},
        non_members=non_members,
        warnings=warnings,
    )


def _sorted_parties(balances: Dict[Hashable, Decimal]):
    """Split into debtors and creditors, largest amount first, ties by id."""
    debtors, creditors = [], []
    for member, value in balances.items():
        if abs(value) < EPSILON:
            continue
        if value < 0:
            debtors.append([member, -value])
        else:
            creditors.append([member, value])

    def order(party):
        return (-party[1], str(party[0]))

    debtors.sort(key=order)
    creditors.sort(key=order)
    return debtors, creditors


def _plan_for_member(balances, focus_member, debtors, creditors) -> List[Transfer]:
    net = balances.get(focus_member)
    if net is None or abs(net) < EPSILON:
        return []

    remaining = abs(net)
    counterparts = creditors if net < 0 else debtors
    transfers = []

    for other, other_remaining in counterparts:
        if remaining < EPSILON:
            break
        amount = min(remaining, other_remaining)
        if amount >= EPSILON:
            if net < 0:
                transfers.append(Transfer(focus_member, other, round_money(amount)))
            else:
                transfers.append(Transfer(other, focus_member, round_money(amount)))
        remaining -= amount

    if remaining > EPSILON * max(len(balances), 1):
        logger.warning(
            'settlement_unmatched_residual',
            residual=str(remaining),
            focus_member=str(focus_member),
        )

    return transfers


def plan_settlements(
    balances: Dict[Hashable, Decimal],
    focus_member: Optional[Hashable] = None,
) -> List[Transfer]:
    """
    Greedy settlement plan: the largest debtor pays the largest creditor
    until one of them is settled, then the next in line steps in.

    Produces at most ``debtors + creditors - 1`` transfers, each of at
    least ``EPSILON``, in a deterministic order.

    With ``focus_member`` only that member's transfers are planned, by
    matching what they owe (or are owed) against the opposite side in
    the same order. A settled or unknown member gets an empty list.

    Balances that do not sum to zero never raise; whatever cannot be
    matched is logged and left out.
    """
    debtors, creditors = _sorted_parties(balances)

    if focus_member is not None:
        return _plan_for_member(balances, focus_member, debtors, creditors)

    transfers: List[Transfer] = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = min(debtor[1], creditor[1])

        if amount >= EPSILON:
            transfers.append(Transfer(debtor[0], creditor[0], round_money(amount)))

        debtor[1] -= amount
        creditor[1] -= amount

        if debtor[1] < EPSILON:
            i += 1
        if creditor[1] < EPSILON:
            j += 1

    residual = (
        sum((party[1] for party in debtors[i:]), ZERO)
        + sum((party[1] for party in creditors[j:]), ZERO)
    )
    if residual > EPSILON * max(len(balances), 1):
        logger.warning(
            'settlement_unmatched_residual',
            residual=str(residual),
            parties=len(balances),
        )

    return transfers
