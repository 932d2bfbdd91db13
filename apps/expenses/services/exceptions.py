"""
Domain-specific exceptions for expenses app.
"""


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class FlatNotFoundError(ExpensesServiceError):
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    pass


class NotFlatMemberError(ExpensesServiceError):
    """Raised when the acting user is not in the expense's flat."""
    pass


class NotExpenseCreatorError(ExpensesServiceError):
    """Raised when someone other than the creator edits or deletes."""
    pass


class InvalidExpenseError(ExpensesServiceError):
    """Raised for payloads that break expense rules (payer, split, amount)."""
    pass
