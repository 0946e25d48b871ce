"""
Domain errors raised by the accounting services.

Services raise these; the API layer maps each kind to an
HTTP status. Anything not listed here (a storage failure,
for example) propagates unclassified.
"""

from decimal import Decimal


class AccountingError(Exception):
    """Base exception for all accounting core failures."""


class ValidationError(AccountingError):
    """Malformed or missing input."""


class NotFoundError(AccountingError):
    """A referenced account, parent, or transaction does not exist."""


class ConflictError(AccountingError):
    """Duplicate account code, or a deletion blocked by dependents."""


class ImbalancedTransactionError(AccountingError):
    """
    Total debits differ from total credits.

    Kept apart from ValidationError: the input is well formed,
    it just breaks the double-entry rule.
    """

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Transaction does not balance: "
            f"debits={total_debit}, credits={total_credit}"
        )
