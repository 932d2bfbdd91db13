"""
Expenses app services layer.
"""

from .exceptions import (
    ExpensesServiceError,
    FlatNotFoundError,
    ExpenseNotFoundError,
    NotFlatMemberError,
    NotExpenseCreatorError,
    InvalidExpenseError,
)

from .expense_management import (
    create_expense,
    get_expense_for_member,
    update_expense,
    delete_expense,
    list_flat_expenses,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'FlatNotFoundError',
    'ExpenseNotFoundError',
    'NotFlatMemberError',
    'NotExpenseCreatorError',
    'InvalidExpenseError',

    # Expense Management
    'create_expense',
    'get_expense_for_member',
    'update_expense',
    'delete_expense',
    'list_flat_expenses',
]
