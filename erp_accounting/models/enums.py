"""
Shared enumerations for database models.

Python enums mapped to database enums, so an invalid
account type is rejected by the database as well as by
request validation.
"""

import enum


class AccountType(str, enum.Enum):
    """The five account categories of the chart of accounts."""
    ASSET = "asset"
    LIABILITY = "liability"
    CAPITAL = "capital"
    INCOME = "income"
    EXPENSE = "expense"


BALANCE_SHEET_TYPES = frozenset({
    AccountType.ASSET,
    AccountType.LIABILITY,
    AccountType.CAPITAL,
})

INCOME_STATEMENT_TYPES = frozenset({
    AccountType.INCOME,
    AccountType.EXPENSE,
})
